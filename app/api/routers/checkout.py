# app/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import StorageUnavailable
from app.domain.schemas import CheckoutOut, ValidationOut
from app.services.checkout_service import CheckoutService
from app.services.lock_service import LockService

router = APIRouter(tags=["checkout"])


def get_lock_service() -> LockService:
    return LockService()


def get_service(db: Session, lock_service: LockService):
    return CheckoutService(db, lock_service=lock_service)


@router.post("/cart/validate", response_model=ValidationOut)
def validate_cart(
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        return svc.validate_for_checkout(user_id)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/checkout", response_model=CheckoutOut)
def checkout(
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Zamienia koszyk na rezerwacje.
    success=True przy czesciowym sukcesie, klient musi sprawdzic errors.
    """
    svc = get_service(db, lock_service)
    try:
        return svc.commit(user_id)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
