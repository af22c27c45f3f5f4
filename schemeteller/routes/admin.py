# schemeteller/routes/admin.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..audit import record_event
from ..db import get_db
from ..engine.types import SchemeStatus
from .users import get_user_or_404
from ..settings import get_settings

settings = get_settings()


def require_admin(x_admin_key: Optional[str] = Header(None)):
    if x_admin_key != settings.ADMIN_KEY:  # simple shared key, no user auth here
        raise HTTPException(403, "Unauthorized")


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _scheme_values(body: schemas.SchemeCreate | schemas.SchemeUpdate, exclude_unset: bool = False) -> dict:
    values = body.model_dump(exclude_unset=exclude_unset, exclude={"eligibility_rules"})
    if "eligibility_rules" in body.model_fields_set or not exclude_unset:
        rules = body.eligibility_rules
        values["eligibility_rules"] = rules.to_document() if rules is not None else {}
    if values.get("applicable_regions") is not None:
        values["applicable_regions"] = [r.value for r in values["applicable_regions"]]
    return values


@router.get("/schemes", response_model=list[schemas.SchemeResponse])
def list_all_schemes(status: Optional[SchemeStatus] = None, db: Session = Depends(get_db)):
    q = db.query(models.Scheme)
    if status is not None:
        q = q.filter(models.Scheme.status == status)
    return q.order_by(models.Scheme.created_at.desc(), models.Scheme.name).all()


def _scheme_or_404(db: Session, scheme_id: str) -> models.Scheme:
    scheme = db.get(models.Scheme, scheme_id)
    if scheme is None:
        raise HTTPException(404, "Scheme not found")
    return scheme


@router.get("/schemes/{scheme_id}", response_model=schemas.SchemeResponse)
def get_any_scheme(scheme_id: str, db: Session = Depends(get_db)):
    return schemas.SchemeResponse.model_validate(_scheme_or_404(db, scheme_id))


@router.post("/schemes", response_model=schemas.SchemeResponse, status_code=201)
def create_scheme(body: schemas.SchemeCreate, db: Session = Depends(get_db)):
    scheme = models.Scheme(**_scheme_values(body))
    db.add(scheme)
    db.commit()
    db.refresh(scheme)

    record_event(db, models.ActionEnum.SCHEME_CREATE, scheme.id, {
        "status": scheme.status.value,
        "eligibility_rules": scheme.eligibility_rules,
    })
    return schemas.SchemeResponse.model_validate(scheme)


@router.patch("/schemes/{scheme_id}", response_model=schemas.SchemeResponse)
def update_scheme(scheme_id: str, body: schemas.SchemeUpdate, db: Session = Depends(get_db)):
    scheme = _scheme_or_404(db, scheme_id)

    changes = _scheme_values(body, exclude_unset=True)
    for required in ("name", "level", "status"):
        if required in changes and changes[required] is None:
            raise HTTPException(422, f"{required} cannot be null")
    for key, value in changes.items():
        setattr(scheme, key, value)
    db.commit()
    db.refresh(scheme)

    # stored match results go stale here; they are rebuilt on the user's next read/refresh
    record_event(db, models.ActionEnum.SCHEME_UPDATE, scheme.id, {"fields": sorted(changes)})
    return schemas.SchemeResponse.model_validate(scheme)


@router.delete("/schemes/{scheme_id}", status_code=204)
def delete_scheme(scheme_id: str, db: Session = Depends(get_db)):
    scheme = _scheme_or_404(db, scheme_id)
    name = scheme.name
    db.delete(scheme)
    db.commit()

    record_event(db, models.ActionEnum.SCHEME_DELETE, scheme_id, {"name": name})
    return Response(status_code=204)


# -------------------------
# USERS
# -------------------------
@router.get("/users", response_model=list[schemas.UserResponse])
def list_users(onboarded: Optional[bool] = None, limit: int = 100, db: Session = Depends(get_db)):
    q = db.query(models.User)
    if onboarded is not None:
        q = q.filter(models.User.onboarding_completed.is_(onboarded))
    limit = max(1, min(limit, 500))
    users = q.order_by(models.User.created_at.desc(), models.User.email).limit(limit).all()
    return [schemas.UserResponse.model_validate(u) for u in users]


@router.get("/users/{user_id}", response_model=schemas.UserResponse)
def get_any_user(user_id: str, db: Session = Depends(get_db)):
    return schemas.UserResponse.model_validate(get_user_or_404(db, user_id))


@router.delete("/users/{user_id}", status_code=204)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()

    # audit rows are kept; they reference the id as plain text
    record_event(db, models.ActionEnum.USER_DELETE, user_id, {})
    return Response(status_code=204)


@router.get("/stats")
def stats(db: Session = Depends(get_db)):
    by_status = dict(
        db.query(models.Scheme.status, func.count(models.Scheme.id))
        .group_by(models.Scheme.status)
        .all()
    )
    return {
        "users": db.query(func.count(models.User.id)).scalar() or 0,
        "onboarded_users": db.query(func.count(models.User.id))
        .filter(models.User.onboarding_completed.is_(True))
        .scalar() or 0,
        "schemes": {s.value: int(by_status.get(s, 0)) for s in SchemeStatus},
    }
