"""
Pytest configuration and fixtures for tests.

Environment is set before any app module is imported: in-memory SQLite
(shared through a StaticPool), eager Celery and an in-memory broker.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import fakeredis
import pytest

from app.data.database import Base, SessionLocal, engine
from app.data.models import (
    BillboardImageModel,
    BillboardModel,
    BillboardSideModel,
    BookingModel,
)
from app.domain.pricing import gst, line_total, total_days
from app.services.cart_events import CartEventBus
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.lock_service import LockService


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def single_billboard(db):
    """One-sided billboard at 1000/day with an image."""
    billboard = BillboardModel(
        title="MG Road Unipole",
        location_address="MG Road, Bengaluru",
        price_per_day=Decimal("1000.00"),
        images=[BillboardImageModel(image_url="https://img.example/mg-road.jpg", position=0)],
    )
    db.add(billboard)
    db.commit()
    return billboard.id


@pytest.fixture
def two_sided_billboard(db):
    """Billboard with sides A and B at 2500/day, no images."""
    billboard = BillboardModel(
        title="Marine Drive Twin Face",
        location_address="Marine Drive, Mumbai",
        price_per_day=Decimal("2500.00"),
        sides=[
            BillboardSideModel(side_identifier="A", side_name="North facing"),
            BillboardSideModel(side_identifier="B", side_name="South facing"),
        ],
    )
    db.add(billboard)
    db.commit()
    return billboard.id


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, as another user's checkout would."""

    def _make(billboard_id, side, start_date, end_date, status="pending", user_id="other-user"):
        days = total_days(start_date, end_date) if end_date > start_date else 1
        total = line_total(Decimal("1000.00"), days)
        gst_amount, final_amount = gst(total)
        booking = BookingModel(
            billboard_id=billboard_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            total_days=days,
            price_per_day=Decimal("1000.00"),
            total_amount=total,
            gst_amount=gst_amount,
            final_amount=final_amount,
            side_booked=side,
            status=status,
            payment_status="pending",
        )
        db.add(booking)
        db.commit()
        return booking.id

    return _make


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def events():
    return CartEventBus()


@pytest.fixture
def published(events):
    """Collects every cart event published during the test."""
    received = []
    events.subscribe(received.append)
    return received


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client)


@pytest.fixture
def notifications():
    return MagicMock()


@pytest.fixture
def cart_service(db, events):
    return CartService(db, events=events)


@pytest.fixture
def checkout_service(db, lock_service, notifications, events):
    return CheckoutService(
        db,
        lock_service=lock_service,
        notification_service=notifications,
        events=events,
    )
