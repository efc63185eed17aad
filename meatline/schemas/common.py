from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def _to_naive_local(value: datetime) -> datetime:
    """Даты храним без таймзоны, в локальном времени"""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# Decimal внутри, число в JSON
Quantity = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

LocalDatetime = Annotated[datetime, AfterValidator(_to_naive_local)]
