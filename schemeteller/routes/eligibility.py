# schemeteller/routes/eligibility.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..db import get_db
from .users import get_user_or_404, refresh_and_record

router = APIRouter(prefix="/users/{user_id}/eligibility", tags=["eligibility"])


@router.get("", response_model=schemas.EligibilityResponse)
def get_eligible_schemes(user_id: str, db: Session = Depends(get_db)):
    """
    Recompute against the current catalog, store the result on the user and
    return the matched schemes.
    """
    user = get_user_or_404(db, user_id)
    if not user.onboarding_completed:
        return schemas.EligibilityResponse(
            eligible=False,
            message="Please complete onboarding first.",
        )

    out = refresh_and_record(db, user_id, "read")
    return schemas.EligibilityResponse(
        eligible=True,
        matched_count=len(out.matched_ids),
        matched_schemes=[schemas.SchemeResponse.model_validate(s) for s in out.matched_schemes],
        vector=out.vector.to_dict(),
    )


@router.post("/refresh", response_model=schemas.RefreshResponse)
def force_refresh(user_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    if not user.onboarding_completed:
        raise HTTPException(400, "Onboarding not completed.")

    out = refresh_and_record(db, user_id, "refresh")
    return schemas.RefreshResponse(
        matched_count=len(out.matched_ids),
        matched_scheme_ids=out.matched_ids,
        message="Eligibility refreshed successfully.",
    )
