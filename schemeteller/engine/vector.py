# schemeteller/engine/vector.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from .types import IncomeBracket


# inclusive upper bounds, checked in order; anything above the last is ABOVE_10L
INCOME_BRACKETS = [
    (100_000, IncomeBracket.BELOW_1L),
    (250_000, IncomeBracket.FROM_1L_TO_2_5L),
    (500_000, IncomeBracket.FROM_2_5L_TO_5L),
    (800_000, IncomeBracket.FROM_5L_TO_8L),
    (1_000_000, IncomeBracket.FROM_8L_TO_10L),
]


@dataclass(frozen=True)
class EligibilityVector:
    """
    Normalized snapshot of a profile at one point in time.

    Never patched in place: every profile change builds a new one.
    """
    age: Optional[int] = None
    gender: Any = None
    category: Any = None
    region: Any = None
    annual_income: Optional[float] = None
    income_bracket: Optional[IncomeBracket] = None
    occupation: Any = None
    is_rural: Optional[bool] = None
    is_bpl: bool = False
    is_disabled: bool = False
    is_minority: bool = False

    def to_dict(self) -> dict:
        """Persisted document shape (camelCase keys, plain values)."""
        return {
            "age": self.age,
            "gender": _plain(self.gender),
            "category": _plain(self.category),
            "region": _plain(self.region),
            "annualIncome": self.annual_income,
            "incomeBracket": _plain(self.income_bracket),
            "occupation": _plain(self.occupation),
            "isRural": self.is_rural,
            "isBPL": self.is_bpl,
            "isDisabled": self.is_disabled,
            "isMinority": self.is_minority,
        }


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def _get(profile: Any, key: str) -> Any:
    if isinstance(profile, dict):
        return profile.get(key)
    return getattr(profile, key, None)


def calculate_age(date_of_birth: date | datetime, today: date | datetime) -> int:
    """
    Completed years between date_of_birth and today.

    A Feb 29 birthday is reached on Mar 1 in non-leap years.
    """
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()
    if isinstance(today, datetime):
        today = today.date()

    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def derive_income_bracket(annual_income: float | None) -> IncomeBracket | None:
    if annual_income is None:
        return None
    for upper, bracket in INCOME_BRACKETS:
        if annual_income <= upper:
            return bracket
    return IncomeBracket.ABOVE_10L


def build_vector(profile: Any, today: date | datetime) -> EligibilityVector:
    """
    Build the eligibility vector for a profile.

    `profile` is a dict with snake_case keys or any object exposing the same
    attributes (User row, pydantic model). Missing fields map to None, and
    unset flags to False; is_rural keeps None as "unknown".
    """
    dob = _get(profile, "date_of_birth")
    income = _get(profile, "annual_income")

    return EligibilityVector(
        age=calculate_age(dob, today) if dob is not None else None,
        gender=_get(profile, "gender"),
        category=_get(profile, "category"),
        region=_get(profile, "region"),
        annual_income=income,
        income_bracket=derive_income_bracket(income),
        occupation=_get(profile, "occupation"),
        is_rural=_get(profile, "is_rural"),
        is_bpl=bool(_get(profile, "is_bpl")),
        is_disabled=bool(_get(profile, "is_disabled")),
        is_minority=bool(_get(profile, "is_minority")),
    )
