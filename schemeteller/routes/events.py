from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import Event

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/recent")
def recent_events(limit: int = 50, subject_id: Optional[str] = None, db: Session = Depends(get_db)):
    limit = max(1, min(limit, 200))
    q = db.query(Event)
    if subject_id:
        q = q.filter(Event.subject_id == subject_id)
    rows = q.order_by(Event.id.desc()).limit(limit).all()
    return [
        {
            "id": r.id,
            "subject_id": r.subject_id,
            "action": (r.action.value if hasattr(r.action, "value") else str(r.action)),
            "actor_type": r.actor_type,
            "created_at": r.created_at,
        }
        for r in rows
    ]
