from .base import (
    MeatlineException,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    UserNotFoundError,
    ProductNotFoundError,
    OrderNotFoundError,
    OrderItemNotFoundError,
    NotificationNotFoundError,
    BatchNotFoundError,
)

__all__ = [
    "MeatlineException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "UserNotFoundError",
    "ProductNotFoundError",
    "OrderNotFoundError",
    "OrderItemNotFoundError",
    "NotificationNotFoundError",
    "BatchNotFoundError",
]
