"""
Хранилище сессий конструктора заказа в боте.

Сессия живет только в памяти процесса: это незавершенный заказ,
после рестарта бота пользователь просто начинает заново.
Ключ - chat_id; на каждый ключ свой asyncio.Lock.
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator, Dict, List, Optional

SELECTING_PRODUCTS = "selecting_products"
ENTERING_QUANTITY = "entering_quantity"
SELECTING_DATES = "selecting_dates"


@dataclass
class SessionItem:
    product_id: int
    product_name: str
    quantity: Decimal = Decimal("0")


@dataclass
class OrderSession:
    """Незавершенный заказ одного чата"""
    user_id: int
    step: str = SELECTING_PRODUCTS
    items: List[SessionItem] = field(default_factory=list)
    order_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    notes: Optional[str] = None

    def selected_product_ids(self) -> List[int]:
        return [item.product_id for item in self.items]


class OrderSessionStore:
    """Сессии по chat_id"""

    def __init__(self):
        self._sessions: Dict[int, OrderSession] = {}
        self._locks: Dict[int, asyncio.Lock] = {}
        self._lock_users: Dict[int, int] = {}

    @asynccontextmanager
    async def lock(self, chat_id: int) -> AsyncIterator[None]:
        """Последовательная обработка одного чата.

        Блокировка удаляется, когда ее никто не держит и не ждет, а сессии
        у чата нет.
        """
        lock = self._locks.setdefault(chat_id, asyncio.Lock())
        self._lock_users[chat_id] = self._lock_users.get(chat_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[chat_id] -= 1
            if not self._lock_users[chat_id]:
                del self._lock_users[chat_id]
                if chat_id not in self._sessions:
                    self._locks.pop(chat_id, None)

    def get(self, chat_id: int) -> Optional[OrderSession]:
        return self._sessions.get(chat_id)

    def set(self, chat_id: int, session: OrderSession) -> None:
        self._sessions[chat_id] = session

    def clear(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)
        if chat_id not in self._lock_users:
            self._locks.pop(chat_id, None)

    def __contains__(self, chat_id: int) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


# Глобальный экземпляр для бота
order_sessions = OrderSessionStore()
