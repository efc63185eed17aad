from . import common, new_order, orders, adjust, notifications, reports

# Порядок важен: шаги конструктора и FSM раньше общих текстовых кнопок
routers = [
    common.router,
    new_order.router,
    adjust.router,
    orders.router,
    notifications.router,
    reports.router,
]

__all__ = ["routers"]
