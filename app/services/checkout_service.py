# app/services/checkout_service.py
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.booking import BookingModel
from app.domain.errors import (
    BillboardLocked,
    CartError,
    SlotConflict,
    ValidationFailed,
)
from app.domain.pricing import gst
from app.domain.schemas import (
    CartItemOut,
    CartSessionOut,
    CheckoutOut,
    InvalidItem,
    ValidationOut,
)
from app.repos.booking_repo import BookingRepo
from app.repos.cart_repo import CartRepo
from app.services.availability_service import AvailabilityService
from app.services.cart_events import CartEvent, CartEventBus, cart_events
from app.services.cart_service import CartService
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

NO_LONGER_AVAILABLE = "No longer available for selected dates"
CART_NOT_CLOSED = "Bookings were created but the cart could not be closed"


class CheckoutService:
    """
    Walidacja koszyka i zamiana pozycji na rezerwacje.
    Separacja od CartService: koszyk nie wie nic o bookings.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
        events: CartEventBus = cart_events,
    ):
        self.carts = CartService(db, events=events)
        self.cart_repo = CartRepo(db)
        self.bookings = BookingRepo(db)
        # checkout zawsze sprawdza scisle, awaria bazy ma wyjsc na wierzch
        self.availability = AvailabilityService(db, fail_open=False)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.events = events

    def validate_for_checkout(self, user_id: str) -> ValidationOut:
        """
        Use Case: ponowne sprawdzenie dostepnosci kazdej pozycji (Query).
        Niczego nie usuwa, usuniecie niedostepnych pozycji nalezy do wywolujacego.
        """
        cart = self.carts.load_cart(user_id)
        if not cart or not cart.items:
            return ValidationOut(valid=False, invalid_items=[])

        invalid_items = self._find_invalid_items(cart)
        return ValidationOut(valid=not invalid_items, invalid_items=invalid_items)

    def commit(self, user_id: str) -> CheckoutOut:
        """
        Use Case: checkout (Command).

        1. Pusty koszyk -> porazka "Cart is empty"
        2. Walidacja calego koszyka, niedostepna pozycja przerywa wszystko
        3. Kazda pozycja zapisywana osobno, blad jednej nie przerywa reszty
        4. Jesli powstala choc jedna rezerwacja -> sesja nieaktywna
           (blad zamkniecia sesji trafia do errors, success zostaje True)
        """
        cart = self.carts.load_cart(user_id)
        if not cart or not cart.items:
            return CheckoutOut(success=False, errors=["Cart is empty"])

        try:
            self._ensure_valid(cart)
        except ValidationFailed as e:
            logger.info(f"Checkout of cart {cart.id} rejected: {e}")
            return CheckoutOut(success=False, errors=e.messages, invalid_items=e.invalid_items)

        booking_ids: list[int] = []
        errors: list[str] = []

        for item in cart.items:
            try:
                booking_ids.append(self._book_item(cart, item))
            except (CartError, SQLAlchemyError, RedisError) as e:
                logger.error(f"Error creating booking for cart item {item.id}: {e}")
                errors.append(f"Failed to create booking for {item.billboard_title}: {e}")

        if booking_ids:
            close_error = self._close_session(cart, booking_ids)
            if close_error:
                errors.append(close_error)

        logger.info(
            f"Checkout of cart {cart.id}: {len(booking_ids)} booking(s) created, {len(errors)} failed"
        )

        return CheckoutOut(
            success=bool(booking_ids),
            booking_ids=booking_ids,
            errors=errors,
        )

    def _find_invalid_items(self, cart: CartSessionOut) -> list[InvalidItem]:
        invalid_items = []
        for item in cart.items:
            availability = self.availability.resolve(item.billboard_id, item.start_date, item.end_date)
            if not self.availability.is_side_available(availability, item.side_booked):
                invalid_items.append(InvalidItem(item_id=item.id, reason=NO_LONGER_AVAILABLE))
        return invalid_items

    def _ensure_valid(self, cart: CartSessionOut):
        invalid_items = self._find_invalid_items(cart)
        if invalid_items:
            raise ValidationFailed(invalid_items)

    def _book_item(self, cart: CartSessionOut, item: CartItemOut) -> int:
        # lock na billboard: dwa checkouty tego samego billboardu nie wejda naraz
        locked = self.lock_service.acquire_billboard_lock(
            billboard_id=item.billboard_id,
            cart_session_id=cart.id,
            ttl=CHECKOUT_LOCK_TTL_SECONDS,
        )
        if not locked:
            raise BillboardLocked(item.billboard_id)

        try:
            # ponowne sprawdzenie tuz przed zapisem - ktos mogl zarezerwowac po walidacji
            if self.availability.has_conflict(
                item.billboard_id, item.side_booked.value, item.start_date, item.end_date
            ):
                raise SlotConflict(item.billboard_id, item.side_booked.value)

            gst_amount, final_amount = gst(item.total_amount)
            booking = self.bookings.create_booking(
                BookingModel(
                    billboard_id=item.billboard_id,
                    user_id=cart.user_id,
                    cart_session_id=cart.id,
                    start_date=item.start_date,
                    end_date=item.end_date,
                    total_days=item.total_days,
                    price_per_day=item.price_per_day,
                    total_amount=item.total_amount,
                    gst_amount=gst_amount,
                    final_amount=final_amount,
                    ad_content=item.ad_content,
                    ad_type=item.ad_type,
                    side_booked=item.side_booked.value,
                    status="pending",
                    payment_status="pending",
                )
            )
        except SQLAlchemyError:
            self.bookings.rollback()
            raise
        finally:
            self._release_lock(item.billboard_id, cart.id)

        logger.info(f"Booking {booking.id} created from cart item {item.id}")
        return booking.id

    def _release_lock(self, billboard_id: int, cart_session_id: int):
        try:
            self.lock_service.release_billboard_lock(billboard_id, cart_session_id)
        except RedisError as e:
            # lock i tak wygasnie po CHECKOUT_LOCK_TTL_SECONDS
            logger.warning(f"Could not release checkout lock for billboard {billboard_id}: {e}")

    def _close_session(self, cart: CartSessionOut, booking_ids: list[int]) -> str | None:
        """
        Dezaktywuje sesje po udanym checkoucie. Rezerwacje sa juz zapisane,
        wiec blad zamkniecia zwracany jest jako komunikat, a nie wyjatek.
        """
        # pozycje zostaja w nieaktywnej sesji
        closed = True
        try:
            self.cart_repo.deactivate_session(cart.id)
            self.cart_repo.commit()
        except SQLAlchemyError as e:
            self.cart_repo.rollback()
            logger.error(f"Bookings {booking_ids} created but cart {cart.id} could not be closed: {e}")
            closed = False

        if closed:
            self.events.publish(CartEvent(user_id=cart.user_id, action="checked_out"))

        try:
            self.notification_service.send_booking_notification(cart.user_id, booking_ids)
        except Exception as e:
            logger.warning(f"Could not queue booking notification for user {cart.user_id}: {e}")

        return None if closed else CART_NOT_CLOSED
