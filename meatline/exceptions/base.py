"""Базовые исключения приложения"""


class MeatlineException(Exception):
    """Базовое исключение приложения"""
    status_code = 500

    def __init__(self, message: str = "", code: str = "unknown"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(MeatlineException):
    """Ошибка валидации данных"""
    status_code = 400

    def __init__(self, message: str = "Validation error", code: str = "validation_error"):
        super().__init__(message, code)


class AuthenticationError(MeatlineException):
    """Нет или неверные учетные данные"""
    status_code = 401

    def __init__(self, message: str = "Authentication required", code: str = "authentication_error"):
        super().__init__(message, code)


class AuthorizationError(MeatlineException):
    """Недостаточно прав доступа"""
    status_code = 403

    def __init__(self, message: str = "Permission denied", code: str = "authorization_error"):
        super().__init__(message, code)


class NotFoundError(MeatlineException):
    status_code = 404

    def __init__(self, message: str = "Not found", code: str = "not_found"):
        super().__init__(message, code)


class ConflictError(MeatlineException):
    status_code = 409

    def __init__(self, message: str = "Already exists", code: str = "conflict"):
        super().__init__(message, code)


class UserNotFoundError(NotFoundError):
    """Пользователь не найден"""
    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found", "user_not_found")


class ProductNotFoundError(NotFoundError):
    """Товар не найден"""
    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found", "product_not_found")


class OrderNotFoundError(NotFoundError):
    """Заказ не найден"""
    def __init__(self, order_id):
        super().__init__(f"Order {order_id} not found", "order_not_found")


class OrderItemNotFoundError(NotFoundError):
    def __init__(self, item_id):
        super().__init__(f"Order item {item_id} not found", "order_item_not_found")


class NotificationNotFoundError(NotFoundError):
    def __init__(self, notification_id):
        super().__init__(f"Notification {notification_id} not found", "notification_not_found")


class BatchNotFoundError(NotFoundError):
    def __init__(self, batch_id):
        super().__init__(f"Production batch {batch_id} not found", "batch_not_found")
