# schemeteller/engine/policy.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .types import Category, Gender, Occupation, Region


class MalformedPolicyError(ValueError):
    """A scheme's stored policy or region list cannot be interpreted."""


class EligibilityPolicy(BaseModel):
    """
    Sparse set of optional predicates attached to a scheme.

    None means "no constraint on this dimension". Empty allow-lists and
    flags set to False are unconstrained as well.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)
    genders: Optional[List[Gender]] = None
    categories: Optional[List[Category]] = None
    max_income: Optional[float] = Field(None, ge=0)
    occupations: Optional[List[Occupation]] = None

    bpl_only: Optional[bool] = None
    disability_only: Optional[bool] = None
    minority_only: Optional[bool] = None
    rural_only: Optional[bool] = None
    urban_only: Optional[bool] = None

    @field_validator("min_age", "max_age", "max_income", mode="before")
    @classmethod
    def _no_bool_bounds(cls, v: Any):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(v, bool):
            raise ValueError("bound must be a number, not a boolean")
        return v

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


_regions_adapter = TypeAdapter(Optional[List[Region]])


def parse_policy(raw: Any) -> EligibilityPolicy:
    if raw is None:
        return EligibilityPolicy()
    if isinstance(raw, EligibilityPolicy):
        return raw
    try:
        return EligibilityPolicy.model_validate(raw)
    except ValidationError as e:
        raise MalformedPolicyError(_summarize(e)) from e


def parse_regions(raw: Any) -> List[Region]:
    try:
        return _regions_adapter.validate_python(raw) or []
    except ValidationError as e:
        raise MalformedPolicyError(_summarize(e)) from e


def _summarize(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)
