import secrets
from datetime import date, datetime, timezone, timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartSessionModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import (
    CartItemNotFound,
    DuplicateItem,
    PricingUnavailable,
    StorageUnavailable,
)
from app.domain.pricing import Side, line_total, money, total_days
from app.domain.schemas import CartItemOut, CartSessionOut, SessionOut, UpdateItemIn
from app.repos.billboard_repo import BillboardRepo
from app.repos.cart_repo import CartRepo
from app.services.availability_service import AvailabilityService
from app.services.cart_events import CartEvent, CartEventBus, cart_events
from app.utils.settings import CART_TTL_SECONDS, DEFAULT_BILLBOARD_IMAGE
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Sesja koszyka i pozycje w koszyku.
    query (get_cart, get_item_count) - odczyt, przy bledzie bazy zwracaja wartosc domyslna
    commands (add, remove, update) - zapis, bledy ida wyzej
    """

    def __init__(self, db: Session, events: CartEventBus = cart_events):
        self.repo = CartRepo(db)
        self.billboards = BillboardRepo(db)
        self.availability = AvailabilityService(db)
        self.events = events

    #query - odczyt
    def get_cart(self, user_id: str) -> CartSessionOut | None:
        try:
            return self.load_cart(user_id)
        except StorageUnavailable as e:
            logger.warning(f"Could not load cart for user {user_id}: {e}")
            return None

    def load_cart(self, user_id: str) -> CartSessionOut | None:
        """Jak get_cart, ale blad bazy konczy sie StorageUnavailable (sciezka checkoutu)."""
        try:
            cart = self.repo.get_active_session_with_items(user_id)
            if not cart:
                return None
            return self._to_out(cart)
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise StorageUnavailable(str(e)) from e

    def get_item_count(self, user_id: str) -> int:
        try:
            cart = self.repo.get_active_session(user_id)
            if not cart:
                return 0
            return self.repo.count_items(cart.id)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.warning(f"Could not count cart items for user {user_id}: {e}")
            return 0

    def get_active_session_id(self, user_id: str) -> int | None:
        try:
            cart = self.repo.get_active_session(user_id)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.warning(f"Could not look up cart session for user {user_id}: {e}")
            return None
        return cart.id if cart else None

    #commands
    def get_or_create_active_session(self, user_id: str) -> int:
        try:
            existing = self.repo.get_active_session(user_id)
            if existing:
                return existing.id

            # brak blokady: dwa rownolegle wywolania moga utworzyc dwie sesje
            now = datetime.now(timezone.utc)
            created = self.repo.create_session(
                CartSessionModel(
                    user_id=user_id,
                    session_token=secrets.token_urlsafe(32),
                    expires_at=now + timedelta(seconds=CART_TTL_SECONDS),
                    is_active=True,
                )
            )
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Could not create cart session for user {user_id}: {e}")
            raise StorageUnavailable(str(e)) from e

        logger.info(f"Created cart session {created.id} for user {user_id}")
        return created.id

    def add_item(
        self,
        user_id: str,
        billboard_id: int,
        side: Side | str,
        start_date: date,
        end_date: date,
        ad_content: str = "",
        ad_type: str = "static",
        price_per_day: Decimal | None = None,
    ) -> CartSessionOut | SessionOut:
        side = Side(side).value
        days = total_days(start_date, end_date)

        session_id = self.get_or_create_active_session(user_id)
        price = self._resolve_price(billboard_id, price_per_day)

        try:
            if self.repo.find_duplicate_item(session_id, billboard_id, start_date, end_date, side):
                raise DuplicateItem()

            billboard_side = self.billboards.get_side(billboard_id, side)

            # dostepnosci tu nie sprawdzamy, wymuszana jest dopiero przy checkoucie
            item = self.repo.add_item(
                CartItemModel(
                    cart_session_id=session_id,
                    billboard_id=billboard_id,
                    billboard_side_id=billboard_side.id if billboard_side else None,
                    start_date=start_date,
                    end_date=end_date,
                    total_days=days,
                    price_per_day=price,
                    total_amount=line_total(price, days),
                    ad_content=ad_content,
                    ad_type=ad_type,
                    side_booked=side,
                    availability_checked_at=datetime.now(timezone.utc),
                    is_available=True,
                )
            )
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Could not add billboard {billboard_id} to cart {session_id}: {e}")
            raise StorageUnavailable(str(e)) from e

        logger.info(
            f"Added billboard {billboard_id} side {side} ({start_date}..{end_date}, "
            f"{days} days) to cart {session_id}"
        )
        self.events.publish(CartEvent(user_id=user_id, action="added", item_id=item.id))

        # pozycja juz zapisana: blad odczytu nie moze zamienic sukcesu w porazke
        try:
            cart = self.load_cart(user_id)
        except StorageUnavailable as e:
            logger.warning(f"Item added to cart {session_id} but cart could not be reloaded: {e}")
            cart = None
        return cart or SessionOut(session_id=session_id)

    def remove_item(self, user_id: str, item_id: int):
        try:
            item = self.repo.get_item(item_id)
            if not item:
                logger.info(f"Cart item {item_id} already gone, nothing to remove")
                return

            self._check_owner(item, user_id)
            self.repo.delete_item(item)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Could not remove cart item {item_id}: {e}")
            raise StorageUnavailable(str(e)) from e

        logger.info(f"Removed cart item {item_id} for user {user_id}")
        self.events.publish(CartEvent(user_id=user_id, action="removed", item_id=item_id))

    def update_item_dates(self, user_id: str, item_id: int, start_date: date, end_date: date):
        self.update_item(user_id, item_id, UpdateItemIn(start_date=start_date, end_date=end_date))

    def update_item(self, user_id: str, item_id: int, changes: UpdateItemIn):
        try:
            item = self.repo.get_item(item_id)
            if not item:
                raise CartItemNotFound(item_id)

            self._check_owner(item, user_id)

            if changes.start_date is not None or changes.end_date is not None:
                start = changes.start_date or item.start_date
                end = changes.end_date or item.end_date
                days = total_days(start, end)
                # stary snapshot dostepnosci opisywal poprzedni termin
                availability = self.availability.resolve(item.billboard_id, start, end)
                available = self.availability.is_side_available(availability, item.side_booked)

                # cena za dzien zostaje zamrozona, przeliczamy tylko dni i sume
                item.start_date = start
                item.end_date = end
                item.total_days = days
                item.total_amount = line_total(item.price_per_day, days)
                item.is_available = available
                item.availability_checked_at = datetime.now(timezone.utc)

            if changes.ad_content is not None:
                item.ad_content = changes.ad_content
            if changes.ad_type is not None:
                item.ad_type = changes.ad_type

            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Could not update cart item {item_id}: {e}")
            raise StorageUnavailable(str(e)) from e
        except ValueError:
            self.repo.rollback()
            raise

        logger.info(f"Updated cart item {item_id} for user {user_id}")
        self.events.publish(CartEvent(user_id=user_id, action="updated", item_id=item_id))

    def _resolve_price(self, billboard_id: int, override: Decimal | None) -> Decimal:
        if override is not None:
            return money(override)

        try:
            price = self.billboards.get_price_per_day(billboard_id)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Price lookup for billboard {billboard_id} failed: {e}")
            raise PricingUnavailable(billboard_id) from e

        if price is None:
            raise PricingUnavailable(billboard_id)
        return money(price)

    @staticmethod
    def _check_owner(item: CartItemModel, user_id: str):
        if item.cart_session.user_id != user_id:
            raise PermissionError("Cart item does not belong to this user")

    @staticmethod
    def _to_out(cart: CartSessionModel) -> CartSessionOut:
        items = []
        for i in cart.items:
            billboard = i.billboard
            image = billboard.images[0].image_url if billboard and billboard.images else DEFAULT_BILLBOARD_IMAGE
            items.append(
                CartItemOut(
                    id=i.id,
                    cart_session_id=i.cart_session_id,
                    billboard_id=i.billboard_id,
                    billboard_side_id=i.billboard_side_id,
                    billboard_title=(billboard.title if billboard else None) or "Unknown Billboard",
                    billboard_location=(billboard.location_address if billboard else None) or "Unknown Location",
                    billboard_image=image,
                    start_date=i.start_date,
                    end_date=i.end_date,
                    total_days=i.total_days,
                    price_per_day=i.price_per_day,
                    total_amount=i.total_amount,
                    ad_content=i.ad_content or "",
                    ad_type=i.ad_type,
                    side_booked=i.side_booked,
                    availability_checked_at=i.availability_checked_at,
                    is_available=i.is_available,
                    created_at=i.created_at,
                    updated_at=i.updated_at,
                )
            )

        # sumy zawsze liczone z pozycji, nigdy nie zapisywane
        return CartSessionOut(
            id=cart.id,
            user_id=cart.user_id,
            session_token=cart.session_token,
            expires_at=cart.expires_at,
            is_active=cart.is_active,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
            items=items,
            total_items=len(items),
            total_amount=sum((i.total_amount for i in items), Decimal("0.00")),
        )
