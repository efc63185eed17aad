from .user_service import UserService
from .product_service import ProductService
from .notification_service import NotificationService
from .order_service import OrderService
from .production_service import ProductionService
from .order_builder import OrderBuilder

__all__ = [
    "UserService",
    "ProductService",
    "NotificationService",
    "OrderService",
    "ProductionService",
    "OrderBuilder",
]
