from .user import UserCreate, UserResponse, LoginRequest, TokenResponse
from .product import ProductCreate, ProductUpdate, ProductResponse
from .order import (
    OrderItemCreate, OrderCreate, OrderUpdate, OrderStatusUpdate, OrderItemAdjust,
    OrderItemResponse, OrderResponse, StatusHistoryResponse
)
from .notification import NotificationResponse
from .production import (
    ProductSummary, DailySummary, BatchItemCreate, BatchCreate, BatchUpdate,
    ActualQuantity, BatchResponse, BatchItemResponse
)

__all__ = [
    "UserCreate", "UserResponse", "LoginRequest", "TokenResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "OrderItemCreate", "OrderCreate", "OrderUpdate", "OrderStatusUpdate", "OrderItemAdjust",
    "OrderItemResponse", "OrderResponse", "StatusHistoryResponse",
    "NotificationResponse",
    "ProductSummary", "DailySummary", "BatchItemCreate", "BatchCreate", "BatchUpdate",
    "ActualQuantity", "BatchResponse", "BatchItemResponse",
]
