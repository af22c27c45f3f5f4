# schemeteller/audit.py
from __future__ import annotations

import json

from sqlalchemy.orm import Session

from . import models
from .logging_config import log_failure
from .settings import get_settings

settings = get_settings()


def record_event(db: Session, action: models.ActionEnum, subject_id: str | None, payload: dict):
    evt = models.Event(
        subject_id=subject_id,
        action=action,
        actor_type="SYSTEM",
        payload=json.dumps(payload, ensure_ascii=False, default=str),
        app_version=settings.APP_VERSION,
        ruleset_version=settings.RULESET_VERSION,
        schema_version=settings.SCHEMA_VERSION,
    )
    db.add(evt)
    db.commit()


def record_failure(
    db: Session,
    stage: str,
    error: Exception | str,
    subject_id: str | None = None,
    error_code: str = "INTERNAL_FALLBACK",
    context: dict | None = None,
) -> str:
    payload = log_failure(error_code, {
        "stage": stage,
        "error": str(error),
        "subject_id": subject_id,
        **(context or {}),
    })
    evt = models.Event(
        subject_id=subject_id,
        action=models.ActionEnum.FAILURE_LOG,
        actor_type="SYSTEM",
        payload=json.dumps(payload, ensure_ascii=False, default=str),
        app_version=settings.APP_VERSION,
        ruleset_version=settings.RULESET_VERSION,
        schema_version=settings.SCHEMA_VERSION,
    )
    db.add(evt)
    db.commit()
    db.refresh(evt)
    return str(evt.id)
