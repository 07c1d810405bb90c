#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import (
    CartItemNotFound,
    DuplicateItem,
    PricingUnavailable,
    StorageUnavailable,
)
from app.domain.schemas import (
    AddItemIn,
    UpdateItemIn,
    CartSessionOut,
    CountOut,
    SessionOut,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.post("/session", response_model=SessionOut)
def get_or_create_session(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return SessionOut(session_id=svc.get_or_create_active_session(user_id))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("", response_model=CartSessionOut)
def get_cart(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    cart = svc.get_cart(user_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart


@router.get("/count", response_model=CountOut)
def get_item_count(user_id: str = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    return CountOut(count=svc.get_item_count(user_id))


@router.post("/items", response_model=CartSessionOut | SessionOut)
def add_item(
    payload: AddItemIn,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = svc.add_item(
            user_id=user_id,
            billboard_id=payload.billboard_id,
            side=payload.side,
            start_date=payload.start_date,
            end_date=payload.end_date,
            ad_content=payload.ad_content,
            ad_type=payload.ad_type,
            price_per_day=payload.price_per_day,
        )
    except DuplicateItem as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PricingUnavailable as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # SessionOut gdy pozycja zapisana, ale koszyka nie udalo sie odczytac
    return cart


@router.patch("/items/{item_id}", status_code=204)
def update_item(
    item_id: int,
    payload: UpdateItemIn,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.update_item(user_id, item_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/items/{item_id}", status_code=204)
def remove_item(
    item_id: int,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_item(user_id, item_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
