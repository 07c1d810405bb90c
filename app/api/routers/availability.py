# app/api/routers/availability.py
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import BillboardAvailability
from app.services.availability_service import AvailabilityService

router = APIRouter(prefix="/billboards", tags=["availability"])


@router.get("/{billboard_id}/availability", response_model=BillboardAvailability)
def get_availability(
    billboard_id: int,
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    return AvailabilityService(db).resolve(billboard_id, start_date, end_date)
