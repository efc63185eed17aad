from . import auth, orders, products, production, notifications

routers = [
    auth.router,
    orders.router,
    products.router,
    production.router,
    notifications.router,
]

__all__ = ["routers"]
