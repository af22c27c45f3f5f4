# schemeteller/engine/persist.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..audit import record_failure
from ..logging_config import log_event
from .rules import find_eligible
from .types import SchemeStatus
from .vector import EligibilityVector, build_vector


class UserNotFoundError(LookupError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


@dataclass
class RefreshOut:
    vector: EligibilityVector
    matched_ids: List[str] = field(default_factory=list)
    matched_schemes: List[Any] = field(default_factory=list)
    malformed: Dict[Any, str] = field(default_factory=dict)


def fetch_approved_schemes(db: Session) -> list[models.Scheme]:
    """Storage-side pre-filter: only APPROVED schemes reach the matcher."""
    return (
        db.query(models.Scheme)
        .filter(models.Scheme.status == SchemeStatus.APPROVED)
        .all()
    )


def refresh_and_persist(db: Session, user_id: str, today: date | None = None) -> RefreshOut:
    """
    Rebuild the user's vector, match it against the approved catalog and
    store {vector, matchedSchemeIds} on the user row in one commit. Profile
    edits still pending on the session go out in that same commit.

    Raises UserNotFoundError without writing anything if the user is gone.
    """
    user = db.get(models.User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    vector = build_vector(user, today or date.today())
    match = find_eligible(vector, fetch_approved_schemes(db))

    user.eligibility_vector = {**vector.to_dict(), "matchedSchemeIds": match.matched_ids}
    user.income_bracket = vector.income_bracket
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    # one FAILURE_LOG event per bad scheme, written after the user row is safe
    for scheme_id, reason in match.malformed.items():
        record_failure(
            db,
            "match",
            reason,
            subject_id=scheme_id,
            error_code="MALFORMED_SCHEME_POLICY",
            context={"user_id": user_id},
        )

    log_event(
        "ELIGIBILITY_REFRESH",
        "vector rebuilt",
        {"user_id": user_id, "matched": len(match.matched_ids), "malformed": len(match.malformed)},
    )
    return RefreshOut(
        vector=vector,
        matched_ids=match.matched_ids,
        matched_schemes=match.matched_schemes,
        malformed=match.malformed,
    )
