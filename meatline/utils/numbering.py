"""Генерация номеров заказов и партий"""
import random
from datetime import datetime
from typing import Awaitable, Callable, Optional

from meatline.exceptions import ConflictError

MAX_NUMBER_ATTEMPTS = 10


def _date_part(now: Optional[datetime]) -> str:
    now = now or datetime.now()
    return now.strftime("%Y%m%d")


def generate_order_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """ORD-YYYYMMDD-RRRR, R в [0, 10000)"""
    rng = rng or random
    return f"ORD-{_date_part(now)}-{rng.randrange(10000):04d}"


def generate_batch_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """BATCH-YYYYMMDD-RRR, R в [0, 1000)"""
    rng = rng or random
    return f"BATCH-{_date_part(now)}-{rng.randrange(1000):03d}"


async def allocate_number(
    generate: Callable[[], str],
    exists: Callable[[str], Awaitable[bool]],
    attempts: int = MAX_NUMBER_ATTEMPTS,
) -> str:
    """Сгенерировать номер, которого еще нет в базе.

    Уникальный индекс в БД остается последней защитой от гонки
    между проверкой и вставкой.
    """
    for _ in range(attempts):
        candidate = generate()
        if not await exists(candidate):
            return candidate
    raise ConflictError("Could not allocate a unique number", "number_collision")
