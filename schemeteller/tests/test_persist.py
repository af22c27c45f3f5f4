from __future__ import annotations

import json
import uuid
from datetime import date

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from schemeteller import models
from schemeteller.db import Base
from schemeteller.engine.catalog import iter_seed_schemes, seed_catalog
from schemeteller.engine.persist import UserNotFoundError, fetch_approved_schemes, refresh_and_persist
from schemeteller.engine.types import Gender, IncomeBracket, Occupation, Region, SchemeStatus
from schemeteller.settings import get_settings


TODAY = date(2024, 6, 1)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _add_scheme(db, name, rules, regions=None, status=SchemeStatus.APPROVED):
    scheme = models.Scheme(name=name, status=status, eligibility_rules=rules, applicable_regions=regions)
    db.add(scheme)
    db.commit()
    return scheme


def _add_user(db, **profile):
    user = models.User(email=f"{uuid.uuid4().hex}@example.org", onboarding_completed=True, **profile)
    db.add(user)
    db.commit()
    return user


def test_refresh_stores_vector_and_matches(db):
    a = _add_scheme(db, "Scheme A", {"genders": ["FEMALE"], "minAge": 23, "maxAge": 60, "maxIncome": 250_000})
    b = _add_scheme(db, "Scheme B", {"genders": ["FEMALE"], "maxIncome": 250_000})
    _add_scheme(db, "Draft", {}, status=SchemeStatus.DRAFT)

    user = _add_user(
        db,
        date_of_birth=date(2002, 1, 1),
        gender=Gender.FEMALE,
        region=Region.MADHYA_PRADESH,
        annual_income=200_000,
        occupation=Occupation.UNEMPLOYED,
    )

    out = refresh_and_persist(db, user.id, today=TODAY)

    assert out.vector.age == 22
    assert out.matched_ids == [b.id]
    assert a.id not in out.matched_ids

    db.expire_all()
    stored = db.get(models.User, user.id)
    assert stored.income_bracket == IncomeBracket.FROM_1L_TO_2_5L
    assert stored.eligibility_vector["age"] == 22
    assert stored.eligibility_vector["gender"] == "FEMALE"
    assert stored.eligibility_vector["isRural"] is None
    assert stored.eligibility_vector["matchedSchemeIds"] == [b.id]


def test_missing_user_raises_and_writes_nothing(db):
    _add_scheme(db, "Open", {})
    with pytest.raises(UserNotFoundError) as exc:
        refresh_and_persist(db, "no-such-user", today=TODAY)
    assert exc.value.user_id == "no-such-user"
    assert db.query(models.User).count() == 0


def test_malformed_scheme_is_skipped_and_reported(db):
    good = _add_scheme(db, "Open", {})
    bad = _add_scheme(db, "Broken", {"minAge": "eighteen"})
    user = _add_user(db)

    out = refresh_and_persist(db, user.id, today=TODAY)

    assert out.matched_ids == [good.id]
    assert bad.id in out.malformed

    failures = (
        db.query(models.Event)
        .filter(models.Event.action == models.ActionEnum.FAILURE_LOG, models.Event.subject_id == bad.id)
        .all()
    )
    assert len(failures) == 1
    assert failures[0].schema_version == get_settings().SCHEMA_VERSION
    payload = json.loads(failures[0].payload)
    assert payload["error_code"] == "MALFORMED_SCHEME_POLICY"
    assert payload["context"]["user_id"] == user.id

    # the good scheme writes no failure
    assert db.query(models.Event).filter(models.Event.subject_id == good.id).count() == 0


def test_undecodable_policy_text_is_malformed(db):
    scheme = _add_scheme(db, "Raw", {})
    db.execute(
        text("UPDATE schemes SET eligibility_rules = :raw WHERE id = :id"),
        {"raw": "{minAge: 18", "id": scheme.id},
    )
    db.commit()
    db.expire_all()
    user = _add_user(db)

    out = refresh_and_persist(db, user.id, today=TODAY)
    assert out.matched_ids == []
    assert scheme.id in out.malformed


def test_catalog_changes_show_up_on_next_refresh(db):
    scheme = _add_scheme(db, "Urban housing", {"urbanOnly": True})
    user = _add_user(db, is_rural=False)

    assert refresh_and_persist(db, user.id, today=TODAY).matched_ids == [scheme.id]

    scheme.status = SchemeStatus.ARCHIVED
    db.commit()
    assert refresh_and_persist(db, user.id, today=TODAY).matched_ids == []

    db.expire_all()
    assert db.get(models.User, user.id).eligibility_vector["matchedSchemeIds"] == []


def test_refresh_replaces_whole_vector(db):
    user = _add_user(db, annual_income=900_000, is_bpl=True)
    refresh_and_persist(db, user.id, today=TODAY)

    user.annual_income = None
    user.is_bpl = False
    db.commit()
    out = refresh_and_persist(db, user.id, today=TODAY)

    db.expire_all()
    stored = db.get(models.User, user.id)
    assert out.vector.income_bracket is None
    assert stored.income_bracket is None
    assert stored.eligibility_vector["annualIncome"] is None
    assert stored.eligibility_vector["isBPL"] is False


def test_fetch_approved_schemes_filters_status(db):
    _add_scheme(db, "Approved", {})
    _add_scheme(db, "Draft", {}, status=SchemeStatus.DRAFT)
    _add_scheme(db, "Archived", {}, status=SchemeStatus.ARCHIVED)

    names = [s.name for s in fetch_approved_schemes(db)]
    assert names == ["Approved"]


def test_seed_catalog_is_idempotent(db):
    expected = len(list(iter_seed_schemes()))
    assert seed_catalog(db) == expected
    assert seed_catalog(db) == 0
    assert len(fetch_approved_schemes(db)) == expected
