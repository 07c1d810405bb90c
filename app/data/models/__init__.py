#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.billboard import BillboardModel, BillboardSideModel, BillboardImageModel
from app.data.models.cart import CartSessionModel
from app.data.models.cart_item import CartItemModel
from app.data.models.booking import BookingModel

__all__ = [
    "BillboardModel",
    "BillboardSideModel",
    "BillboardImageModel",
    "CartSessionModel",
    "CartItemModel",
    "BookingModel",
]
