# app/services/cart_events.py
from dataclasses import dataclass
from typing import Callable

from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartEvent:
    user_id: str
    action: str  # added, removed, updated, checked_out
    item_id: int | None = None


Listener = Callable[[CartEvent], None]


class CartEventBus:
    """
    Powiadomienie "koszyk sie zmienil" w obrebie procesu.
    Best-effort: brak sluchaczy = zdarzenie przepada, UI i tak odswieza przy otwarciu.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: CartEvent):
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # blad sluchacza nie moze zepsuc operacji na koszyku
                logger.warning(f"Cart event listener failed for {event}: {e}")


cart_events = CartEventBus()
