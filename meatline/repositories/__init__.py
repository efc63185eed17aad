from .user import UserRepository
from .product import ProductRepository
from .order import OrderRepository
from .notification import NotificationRepository
from .production import ProductionBatchRepository

__all__ = [
    "UserRepository",
    "ProductRepository",
    "OrderRepository",
    "NotificationRepository",
    "ProductionBatchRepository",
]
