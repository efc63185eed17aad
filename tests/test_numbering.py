import re
import random
from datetime import datetime

import pytest

from meatline.exceptions import ConflictError
from meatline.utils.numbering import (
    generate_order_number, generate_batch_number, allocate_number, MAX_NUMBER_ATTEMPTS
)


class FixedRandom:
    """randrange всегда возвращает заданные значения по очереди"""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.values.pop(0)


def test_order_number_format():
    number = generate_order_number(datetime(2026, 1, 11, 15, 30), random.Random(42))
    assert re.fullmatch(r"ORD-20260111-\d{4}", number)


def test_order_number_is_zero_padded():
    rng = FixedRandom(7)
    assert generate_order_number(datetime(2026, 1, 11), rng) == "ORD-20260111-0007"
    assert rng.calls == [10000]


def test_batch_number_is_zero_padded():
    rng = FixedRandom(5)
    assert generate_batch_number(datetime(2026, 3, 2), rng) == "BATCH-20260302-005"
    assert rng.calls == [1000]


def test_numbers_use_current_date_by_default():
    today = datetime.now().strftime("%Y%m%d")
    assert generate_order_number().startswith(f"ORD-{today}-")
    assert generate_batch_number().startswith(f"BATCH-{today}-")


async def test_allocate_number_redraws_taken_numbers():
    taken = {"ORD-20260111-0001", "ORD-20260111-0002"}
    candidates = iter(["ORD-20260111-0001", "ORD-20260111-0002", "ORD-20260111-0003"])

    async def exists(number):
        return number in taken

    number = await allocate_number(lambda: next(candidates), exists)
    assert number == "ORD-20260111-0003"


async def test_allocate_number_gives_up_after_max_attempts():
    attempts = []

    async def exists(number):
        attempts.append(number)
        return True

    with pytest.raises(ConflictError) as exc_info:
        await allocate_number(lambda: "ORD-20260111-0001", exists)

    assert exc_info.value.status_code == 409
    assert len(attempts) == MAX_NUMBER_ATTEMPTS
