from .numbering import generate_order_number, generate_batch_number, allocate_number
from .sessions import OrderSession, OrderSessionStore, SessionItem, order_sessions

__all__ = [
    "generate_order_number",
    "generate_batch_number",
    "allocate_number",
    "OrderSession",
    "OrderSessionStore",
    "SessionItem",
    "order_sessions",
]
