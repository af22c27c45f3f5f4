from __future__ import annotations

from datetime import date, datetime

import pytest

from schemeteller.engine.types import Gender, IncomeBracket, Region
from schemeteller.engine.vector import (
    EligibilityVector,
    build_vector,
    calculate_age,
    derive_income_bracket,
)


TODAY = date(2024, 6, 1)


# -------------------------
# AGE
# -------------------------
def test_age_day_before_and_on_birthday():
    dob = date(2000, 6, 15)
    assert calculate_age(dob, date(2024, 6, 14)) == 23
    assert calculate_age(dob, date(2024, 6, 15)) == 24


def test_age_born_today_is_zero():
    assert calculate_age(TODAY, TODAY) == 0


def test_age_leap_day_birthday():
    dob = date(2000, 2, 29)
    assert calculate_age(dob, date(2001, 2, 28)) == 0
    assert calculate_age(dob, date(2001, 3, 1)) == 1
    assert calculate_age(dob, date(2004, 2, 29)) == 4


def test_age_accepts_datetimes():
    assert calculate_age(datetime(2002, 1, 1, 23, 59), datetime(2024, 6, 1, 0, 1)) == 22


def test_age_is_deterministic_for_fixed_dates():
    dob = date(1990, 12, 31)
    assert calculate_age(dob, TODAY) == calculate_age(dob, TODAY) == 33


# -------------------------
# INCOME BRACKET
# -------------------------
@pytest.mark.parametrize(
    "income, expected",
    [
        (0, "BELOW_1L"),
        (100_000, "BELOW_1L"),
        (100_001, "1L_TO_2_5L"),
        (250_000, "1L_TO_2_5L"),
        (500_000, "2_5L_TO_5L"),
        (800_000, "5L_TO_8L"),
        (1_000_000, "8L_TO_10L"),
        (1_000_001, "ABOVE_10L"),
    ],
)
def test_income_bracket_boundaries(income, expected):
    assert derive_income_bracket(income) == IncomeBracket(expected)
    assert derive_income_bracket(income).value == expected


def test_income_bracket_none():
    assert derive_income_bracket(None) is None


# -------------------------
# BUILD VECTOR
# -------------------------
def test_build_vector_empty_profile_defaults():
    v = build_vector({}, TODAY)
    assert v == EligibilityVector()
    assert v.age is None
    assert v.income_bracket is None
    assert v.is_rural is None
    assert (v.is_bpl, v.is_disabled, v.is_minority) == (False, False, False)


def test_build_vector_passes_fields_through():
    profile = {
        "date_of_birth": date(2002, 1, 1),
        "gender": Gender.FEMALE,
        "category": "GENERAL",
        "region": Region.MADHYA_PRADESH,
        "annual_income": 200_000,
        "occupation": "UNEMPLOYED",
        "is_rural": False,
        "is_bpl": None,
        "is_disabled": True,
    }
    v = build_vector(profile, TODAY)

    assert v.age == 22
    assert v.gender == Gender.FEMALE
    assert v.category == "GENERAL"
    assert v.region == Region.MADHYA_PRADESH
    assert v.annual_income == 200_000
    assert v.income_bracket == IncomeBracket.FROM_1L_TO_2_5L
    assert v.is_rural is False
    assert v.is_bpl is False
    assert v.is_disabled is True


def test_build_vector_reads_attributes():
    class Row:
        date_of_birth = date(2000, 6, 15)
        annual_income = None
        is_rural = True

    v = build_vector(Row(), date(2024, 6, 15))
    assert v.age == 24
    assert v.annual_income is None
    assert v.is_rural is True
    assert v.gender is None


def test_vector_is_immutable():
    v = build_vector({}, TODAY)
    with pytest.raises(Exception):
        v.age = 30


def test_vector_document_shape():
    v = build_vector(
        {"gender": Gender.MALE, "region": Region.ODISHA, "annual_income": 100_001},
        TODAY,
    )
    doc = v.to_dict()
    assert doc["gender"] == "MALE"
    assert doc["region"] == "ODISHA"
    assert doc["annualIncome"] == 100_001
    assert doc["incomeBracket"] == "1L_TO_2_5L"
    assert doc["isRural"] is None
    assert set(doc) == {
        "age", "gender", "category", "region", "annualIncome", "incomeBracket",
        "occupation", "isRural", "isBPL", "isDisabled", "isMinority",
    }
