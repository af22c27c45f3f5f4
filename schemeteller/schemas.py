# schemeteller/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, List, Annotated, Any

from pydantic import BaseModel, Field, StringConstraints, ConfigDict, field_validator

from .engine.policy import EligibilityPolicy
from .engine.types import (
    Category,
    Gender,
    IncomeBracket,
    Occupation,
    Region,
    SchemeLevel,
    SchemeStatus,
)


Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$"),
]


class UserCreate(BaseModel):
    email: Email
    name: Optional[str] = Field(None, max_length=120)


class ProfileIn(BaseModel):
    """Full profile submitted when onboarding completes."""

    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    category: Optional[Category] = None
    region: Optional[Region] = None
    district: Optional[str] = Field(None, max_length=120)
    is_rural: Optional[bool] = None  # None = unknown
    annual_income: Optional[float] = Field(None, ge=0)
    occupation: Optional[Occupation] = None
    is_bpl: bool = False
    is_disabled: bool = False
    is_minority: bool = False

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, v: Optional[date]):
        if v is not None and v > date.today():
            raise ValueError("date_of_birth cannot be in the future")
        return v


class ProfileUpdate(ProfileIn):
    """Partial update: only fields present in the request are applied."""

    name: Optional[str] = Field(None, max_length=120)
    is_bpl: Optional[bool] = None
    is_disabled: Optional[bool] = None
    is_minority: Optional[bool] = None

    @field_validator("is_bpl", "is_disabled", "is_minority", mode="after")
    @classmethod
    def _flag_default(cls, v: Optional[bool]):
        # an explicit null clears the flag
        return bool(v)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: str
    onboarding_completed: bool

    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    category: Optional[Category] = None
    region: Optional[Region] = None
    district: Optional[str] = None
    is_rural: Optional[bool] = None
    annual_income: Optional[float] = None
    occupation: Optional[Occupation] = None
    is_bpl: bool = False
    is_disabled: bool = False
    is_minority: bool = False

    income_bracket: Optional[IncomeBracket] = None
    eligibility_vector: Optional[dict] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SchemeCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    description: Optional[str] = None
    ministry: Optional[str] = None
    level: SchemeLevel = SchemeLevel.CENTRAL
    status: SchemeStatus = SchemeStatus.DRAFT
    eligibility_rules: EligibilityPolicy = Field(default_factory=EligibilityPolicy)
    applicable_regions: Optional[List[Region]] = None
    official_link: Optional[str] = None


class SchemeUpdate(BaseModel):
    name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]] = None
    description: Optional[str] = None
    ministry: Optional[str] = None
    level: Optional[SchemeLevel] = None
    status: Optional[SchemeStatus] = None
    eligibility_rules: Optional[EligibilityPolicy] = None
    applicable_regions: Optional[List[Region]] = None
    official_link: Optional[str] = None


class SchemeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    ministry: Optional[str] = None
    level: SchemeLevel
    status: SchemeStatus
    # stored documents are returned as-is, even when malformed
    eligibility_rules: Optional[Any] = None
    applicable_regions: Optional[Any] = None
    official_link: Optional[str] = None


class EligibilityResponse(BaseModel):
    eligible: bool
    message: Optional[str] = None
    matched_count: int = 0
    matched_schemes: List[SchemeResponse] = Field(default_factory=list)
    vector: Optional[dict] = None


class RefreshResponse(BaseModel):
    matched_count: int
    matched_scheme_ids: List[str] = Field(default_factory=list)
    message: str
