# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime

from app.domain.pricing import Side


class AddItemIn(BaseModel):
    """Schema dla dodawania billboardu do koszyka."""

    billboard_id: int = Field(..., gt=0, description="ID billboardu (musi być > 0)")
    side: Side = Field(Side.SINGLE, description="Strona billboardu: A, B, BOTH lub SINGLE")
    start_date: date
    end_date: date
    ad_content: str = ""
    ad_type: str = "static"
    price_per_day: Optional[Decimal] = Field(None, gt=0, description="Nadpisanie ceny za dzien")

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class UpdateItemIn(BaseModel):
    """Schema dla edycji pozycji koszyka."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    ad_content: Optional[str] = None
    ad_type: Optional[str] = None


class CartItemOut(BaseModel):
    id: int
    cart_session_id: int
    billboard_id: int
    billboard_side_id: Optional[int] = None
    billboard_title: str
    billboard_location: str
    billboard_image: str
    start_date: date
    end_date: date
    total_days: int
    price_per_day: Decimal
    total_amount: Decimal
    ad_content: str
    ad_type: str
    side_booked: Side
    availability_checked_at: Optional[datetime] = None
    is_available: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CartSessionOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    user_id: str
    session_token: str
    expires_at: datetime
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[CartItemOut]
    total_items: int
    total_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    session_id: int


class CountOut(BaseModel):
    count: int


class SideAvailability(BaseModel):
    side: Side
    available: bool


class BillboardAvailability(BaseModel):
    billboard_id: int
    available: bool
    side_a_available: bool
    side_b_available: bool
    single_side_available: bool
    availability_details: List[SideAvailability]


class InvalidItem(BaseModel):
    item_id: int
    reason: str


class ValidationOut(BaseModel):
    valid: bool
    invalid_items: List[InvalidItem] = []


class CheckoutOut(BaseModel):
    """Wynik checkoutu. success=True przy czesciowym sukcesie, sprawdz errors."""

    success: bool
    booking_ids: List[int] = []
    errors: List[str] = []
    invalid_items: List[InvalidItem] = []
