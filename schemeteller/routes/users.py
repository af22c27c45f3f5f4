# schemeteller/routes/users.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..audit import record_event
from ..db import get_db
from ..engine.persist import RefreshOut, UserNotFoundError, refresh_and_persist
from ..engine.vector import derive_income_bracket
from ..settings import get_settings

router = APIRouter(prefix="/users", tags=["users"])
settings = get_settings()


def get_user_or_404(db: Session, user_id: str) -> models.User:
    user = db.get(models.User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def record_refresh(db: Session, user_id: str, trigger: str, out: RefreshOut) -> None:
    record_event(db, models.ActionEnum.ELIGIBILITY_REFRESH, user_id, {
        "trigger": trigger,
        "matched_scheme_ids": out.matched_ids,
        "malformed_scheme_ids": list(out.malformed),
    })


def refresh_and_record(db: Session, user_id: str, trigger: str) -> RefreshOut:
    out = refresh_and_persist(db, user_id)
    record_refresh(db, user_id, trigger, out)
    return out


# -------------------------
# CREATE / READ
# -------------------------
@router.post("", response_model=schemas.UserResponse, status_code=201)
def create_user(body: schemas.UserCreate, db: Session = Depends(get_db)):
    user = models.User(email=body.email.lower(), name=body.name)
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "Email already registered")

    record_event(db, models.ActionEnum.CREATE_USER, user.id, {})
    return schemas.UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=schemas.UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return get_user_or_404(db, user_id)


# -------------------------
# ONBOARDING (first computation)
# -------------------------
@router.post("/{user_id}/onboarding", response_model=schemas.UserResponse)
def complete_onboarding(
    user_id: str,
    profile: schemas.ProfileIn,
    response: Response,
    db: Session = Depends(get_db),
):
    response.headers["X-Ruleset-Version"] = settings.RULESET_VERSION
    user = get_user_or_404(db, user_id)

    for key, value in profile.model_dump().items():
        setattr(user, key, value)
    user.income_bracket = derive_income_bracket(profile.annual_income)
    user.onboarding_completed = True

    # profile and match results land in the same commit
    out = refresh_and_persist(db, user_id)

    record_event(db, models.ActionEnum.ONBOARDING, user_id, {"fields": sorted(profile.model_fields_set)})
    record_refresh(db, user_id, "onboarding", out)

    db.refresh(user)
    return schemas.UserResponse.model_validate(user)


# -------------------------
# PROFILE EDIT (recompute)
# -------------------------
@router.patch("/{user_id}/profile", response_model=schemas.UserResponse)
def update_profile(user_id: str, patch: schemas.ProfileUpdate, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)

    changes = patch.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(user, key, value)
    # bracket stays in step with income even before onboarding is done
    if "annual_income" in changes:
        user.income_bracket = derive_income_bracket(changes["annual_income"])

    out = None
    if user.onboarding_completed:
        out = refresh_and_persist(db, user_id)
    else:
        db.commit()

    record_event(db, models.ActionEnum.PROFILE_UPDATE, user_id, {"fields": sorted(changes)})
    if out is not None:
        record_refresh(db, user_id, "profile_update", out)

    db.refresh(user)
    return schemas.UserResponse.model_validate(user)
