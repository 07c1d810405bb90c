# app/domain/errors.py


class CartError(Exception):
    """Bazowy wyjatek domeny koszyka."""


class StorageUnavailable(CartError):
    """Baza danych nieosiagalna podczas operacji zapisu."""


class DuplicateItem(CartError):
    def __init__(self, message: str = "This billboard is already in your cart for the selected dates"):
        super().__init__(message)


class PricingUnavailable(CartError):
    def __init__(self, billboard_id: int):
        self.billboard_id = billboard_id
        super().__init__(f"Price for billboard {billboard_id} is not available")


class CartItemNotFound(CartError, ValueError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Cart item {item_id} not found")


class ValidationFailed(CartError):
    """Co najmniej jedna pozycja koszyka stracila dostepnosc."""

    def __init__(self, invalid_items: list):
        self.invalid_items = invalid_items
        super().__init__(f"{len(invalid_items)} cart item(s) are no longer available")

    @property
    def messages(self) -> list[str]:
        return [f"Item {i.item_id}: {i.reason}" for i in self.invalid_items]


class SlotConflict(CartError):
    def __init__(self, billboard_id: int, side: str):
        self.billboard_id = billboard_id
        self.side = side
        super().__init__(f"Side {side} of billboard {billboard_id} was booked by another user")


class BillboardLocked(CartError):
    def __init__(self, billboard_id: int):
        self.billboard_id = billboard_id
        super().__init__(f"Billboard {billboard_id} is being booked by another checkout")
