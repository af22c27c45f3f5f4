# schemeteller/routes/ops.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from ..db import get_db
from ..engine.persist import fetch_approved_schemes
from ..settings import get_settings

router = APIRouter(prefix="/ops", tags=["operations"])
settings = get_settings()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Deep health check: database reachable and an approved catalog present.
    """
    status = {
        "api": "online",
        "version": settings.APP_VERSION,
        "ruleset": settings.RULESET_VERSION,
        "checks": {},
    }

    try:
        db.execute(text("SELECT 1"))
        status["checks"]["database"] = "ok"
    except Exception as e:
        status["checks"]["database"] = f"failed: {str(e)}"
        raise HTTPException(503, detail=status)

    approved = len(fetch_approved_schemes(db))
    status["checks"]["catalog"] = "ok" if approved else "empty"
    status["approved_schemes"] = approved
    return status
