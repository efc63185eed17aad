from datetime import date, datetime
from decimal import Decimal

from meatline.models import OrderItem
from meatline.utils.validators import parse_quantity, parse_positive_quantity, parse_date, day_bounds


def test_parse_quantity_accepts_comma():
    assert parse_quantity("12,5") == Decimal("12.5")
    assert parse_quantity(" 3 ") == Decimal("3")


def test_parse_quantity_rejects_garbage():
    assert parse_quantity("abc") is None
    assert parse_quantity("NaN") is None
    assert parse_quantity(None) is None


def test_parse_positive_quantity():
    assert parse_positive_quantity("0") is None
    assert parse_positive_quantity("-2") is None
    assert parse_positive_quantity("0.5") == Decimal("0.5")


def test_parse_date():
    assert parse_date("2026-01-11") == datetime(2026, 1, 11)
    assert parse_date("11.01.2026") is None
    assert parse_date("") is None


def test_day_bounds_are_inclusive():
    start, end = day_bounds(date(2026, 1, 11))
    assert start == datetime(2026, 1, 11, 0, 0, 0)
    assert end == datetime(2026, 1, 11, 23, 59, 59, 999999)
    assert day_bounds(datetime(2026, 1, 11, 18, 0)) == (start, end)


def test_effective_quantity_prefers_adjustment():
    item = OrderItem(quantity=Decimal("10"), original_quantity=Decimal("10"))
    assert item.effective_quantity == Decimal("10")
    item.adjusted_quantity = Decimal("8")
    assert item.effective_quantity == Decimal("8")
