# schemeteller/models.py
from __future__ import annotations

import enum
import uuid
import json
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Enum as SAEnum,
    DateTime,
    Date,
    Float,
    Boolean,
    Integer,
    Text,
)
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator, TEXT

from .db import Base
from .engine.types import (
    Category,
    Gender,
    IncomeBracket,
    Occupation,
    Region,
    SchemeLevel,
    SchemeStatus,
)


# -------------------------
# SQLite-safe JSON document
# -------------------------
class JsonDocument(TypeDecorator):
    """
    Stores any JSON value as TEXT; NULL stays NULL.

    Undecodable text is handed back as-is so the eligibility engine can
    report it as malformed instead of reading it as "no constraint".
    """
    impl = TEXT
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value, ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError:
            return value


class ActionEnum(str, enum.Enum):
    CREATE_USER = "CREATE_USER"
    ONBOARDING = "ONBOARDING"
    PROFILE_UPDATE = "PROFILE_UPDATE"
    ELIGIBILITY_REFRESH = "ELIGIBILITY_REFRESH"
    SCHEME_CREATE = "SCHEME_CREATE"
    SCHEME_UPDATE = "SCHEME_UPDATE"
    SCHEME_DELETE = "SCHEME_DELETE"
    USER_DELETE = "USER_DELETE"
    FAILURE_LOG = "FAILURE_LOG"


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=True)
    email = Column(String, nullable=False, unique=True, index=True)

    onboarding_completed = Column(Boolean, nullable=False, default=False)

    # Profile
    date_of_birth = Column(Date, nullable=True)
    gender = Column(SAEnum(Gender), nullable=True)
    category = Column(SAEnum(Category), nullable=True)
    region = Column(SAEnum(Region), nullable=True)
    district = Column(String, nullable=True)
    is_rural = Column(Boolean, nullable=True)  # NULL = unknown
    annual_income = Column(Float, nullable=True)
    occupation = Column(SAEnum(Occupation), nullable=True)
    is_bpl = Column(Boolean, nullable=False, default=False)
    is_disabled = Column(Boolean, nullable=False, default=False)
    is_minority = Column(Boolean, nullable=False, default=False)

    # Derived
    income_bracket = Column(SAEnum(IncomeBracket), nullable=True)
    eligibility_vector = Column(JsonDocument, nullable=True)  # vector + matchedSchemeIds

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Scheme(Base):
    __tablename__ = "schemes"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    ministry = Column(String, nullable=True)
    level = Column(SAEnum(SchemeLevel), nullable=False, default=SchemeLevel.CENTRAL)
    status = Column(SAEnum(SchemeStatus), nullable=False, default=SchemeStatus.DRAFT, index=True)

    eligibility_rules = Column(JsonDocument, nullable=True)
    applicable_regions = Column(JsonDocument, nullable=True)  # NULL / [] = national
    official_link = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)

    subject_id = Column(String, nullable=True, index=True)  # user or scheme id
    action = Column(SAEnum(ActionEnum), nullable=False)
    actor_type = Column(String, default="SYSTEM")
    payload = Column(Text, default="{}")

    app_version = Column(String, default="dev")
    ruleset_version = Column(String, default="dev")
    schema_version = Column(String, default="dev")

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
