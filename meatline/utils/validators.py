"""Валидаторы пользовательского ввода"""
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple, Union

DATE_FORMAT = "%Y-%m-%d"


def parse_quantity(text: Optional[str]) -> Optional[Decimal]:
    """Число из текста бота; None если это не число"""
    if text is None:
        return None
    try:
        value = Decimal(text.strip().replace(",", "."))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_positive_quantity(text: Optional[str]) -> Optional[Decimal]:
    value = parse_quantity(text)
    if value is None or value <= 0:
        return None
    return value


def parse_date(text: Optional[str]) -> Optional[datetime]:
    """YYYY-MM-DD -> datetime в 00:00; None если не разобрать"""
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT)
    except ValueError:
        return None


def day_bounds(day: Union[date, datetime]) -> Tuple[datetime, datetime]:
    """Границы календарного дня включительно: 00:00:00.000000 - 23:59:59.999999"""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def sanitize_text(text: str, max_length: int = 1000) -> str:
    return text.strip()[:max_length]
