# schemeteller/routes/schemes.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..engine.persist import fetch_approved_schemes
from ..engine.policy import MalformedPolicyError, parse_regions
from ..engine.types import Region, SchemeStatus

router = APIRouter(prefix="/schemes", tags=["schemes"])


def _available_in(scheme: models.Scheme, region: Region) -> bool:
    try:
        regions = parse_regions(scheme.applicable_regions)
    except MalformedPolicyError:
        return False
    return not regions or region in regions


@router.get("", response_model=list[schemas.SchemeResponse])
def list_schemes(region: Optional[Region] = None, db: Session = Depends(get_db)):
    rows = fetch_approved_schemes(db)
    if region is not None:
        rows = [s for s in rows if _available_in(s, region)]
    return sorted(rows, key=lambda s: s.name)


@router.get("/{scheme_id}", response_model=schemas.SchemeResponse)
def get_scheme(scheme_id: str, db: Session = Depends(get_db)):
    scheme = db.get(models.Scheme, scheme_id)
    if scheme is None or scheme.status != SchemeStatus.APPROVED:
        raise HTTPException(404, "Scheme not found")
    return scheme
