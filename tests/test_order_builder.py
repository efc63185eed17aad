from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import select

from meatline.models import Order, OrderStatusEnum
from meatline.exceptions import ValidationError, ProductNotFoundError
from meatline.services import OrderBuilder
from meatline.utils.sessions import (
    OrderSessionStore, SELECTING_PRODUCTS, ENTERING_QUANTITY, SELECTING_DATES
)

CHAT_ID = 1001


@pytest.fixture
def store():
    return OrderSessionStore()


@pytest.fixture
def builder(session, store):
    return OrderBuilder(session, store)


async def _orders(session):
    result = await session.execute(select(Order))
    return list(result.scalars().all())


async def test_full_conversation_creates_one_order(session, store, builder, distributor, sausage):
    products = await builder.start(CHAT_ID, distributor.id)
    assert [p.id for p in products] == [sausage.id]

    await builder.select_product(CHAT_ID, sausage.id)
    remaining = await builder.enter_quantity(CHAT_ID, "5")
    assert remaining == []
    await builder.confirm(CHAT_ID)
    assert await builder.enter_date(CHAT_ID, "2026-01-24") is None
    order = await builder.enter_date(CHAT_ID, "2026-01-25")

    assert order.status == OrderStatusEnum.DRAFT
    assert order.distributor_id == distributor.id
    assert order.order_date == datetime(2026, 1, 24)
    assert order.delivery_date == datetime(2026, 1, 25)
    assert len(order.items) == 1
    item = order.items[0]
    assert item.product_id == sausage.id
    assert item.quantity == Decimal("5")
    assert item.original_quantity == Decimal("5")
    assert [h.status for h in order.status_history] == [OrderStatusEnum.DRAFT]

    assert len(await _orders(session)) == 1
    assert CHAT_ID not in store

    # тот же чат начинает с чистого листа
    await builder.start(CHAT_ID, distributor.id)
    fresh = store.get(CHAT_ID)
    assert fresh.items == []
    assert fresh.step == SELECTING_PRODUCTS
    assert fresh.order_date is None


async def test_steps_follow_the_conversation(store, builder, distributor, sausage, sardelka):
    await builder.start(CHAT_ID, distributor.id)
    assert store.get(CHAT_ID).step == SELECTING_PRODUCTS

    await builder.select_product(CHAT_ID, sardelka.id)
    assert store.get(CHAT_ID).step == ENTERING_QUANTITY
    assert store.get(CHAT_ID).items[-1].quantity == 0

    remaining = await builder.enter_quantity(CHAT_ID, "2,5")
    assert [p.id for p in remaining] == [sausage.id]
    assert store.get(CHAT_ID).items[-1].quantity == Decimal("2.5")
    assert store.get(CHAT_ID).step == SELECTING_PRODUCTS

    await builder.confirm(CHAT_ID)
    assert store.get(CHAT_ID).step == SELECTING_DATES


@pytest.mark.parametrize("text", ["abc", "0", "-3", ""])
async def test_bad_quantity_keeps_step(store, builder, distributor, sausage, text):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)

    with pytest.raises(ValidationError):
        await builder.enter_quantity(CHAT_ID, text)
    assert store.get(CHAT_ID).step == ENTERING_QUANTITY


async def test_bad_date_keeps_session(session, store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)
    await builder.enter_quantity(CHAT_ID, "1")
    await builder.confirm(CHAT_ID)

    with pytest.raises(ValidationError):
        await builder.enter_date(CHAT_ID, "24.01.2026")
    assert store.get(CHAT_ID).order_date is None
    assert await _orders(session) == []


async def test_confirm_requires_items(store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    with pytest.raises(ValidationError):
        await builder.confirm(CHAT_ID)
    assert store.get(CHAT_ID).step == SELECTING_PRODUCTS


async def test_no_active_products_no_session(store, builder, distributor, archived_product):
    assert await builder.start(CHAT_ID, distributor.id) == []
    assert CHAT_ID not in store


async def test_without_session(builder, sausage):
    assert await builder.select_product(CHAT_ID, sausage.id) is None
    assert await builder.enter_quantity(CHAT_ID, "5") is None
    assert await builder.confirm(CHAT_ID) is None
    assert await builder.enter_date(CHAT_ID, "2026-01-24") is None


async def test_unknown_product(builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    with pytest.raises(ProductNotFoundError):
        await builder.select_product(CHAT_ID, 9999)


async def test_start_overwrites_previous_session(store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)
    await builder.start(CHAT_ID, distributor.id)
    assert store.get(CHAT_ID).items == []


async def test_cancel_drops_session(store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    await builder.cancel(CHAT_ID)
    assert CHAT_ID not in store
    await builder.cancel(CHAT_ID)
    assert len(store) == 0


async def test_confirm_while_waiting_for_quantity(store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)

    assert await builder.confirm(CHAT_ID) is None
    order_session = store.get(CHAT_ID)
    assert order_session.step == ENTERING_QUANTITY
    assert await builder.enter_date(CHAT_ID, "2026-01-24") is None
    assert order_session.order_date is None


async def test_product_buttons_ignored_after_confirm(session, store, builder, distributor, sausage, sardelka):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)
    await builder.enter_quantity(CHAT_ID, "5")
    await builder.confirm(CHAT_ID)
    await builder.enter_date(CHAT_ID, "2026-01-24")

    assert await builder.select_product(CHAT_ID, sardelka.id) is None
    order_session = store.get(CHAT_ID)
    assert order_session.step == SELECTING_DATES
    assert [(i.product_id, i.quantity) for i in order_session.items] == [(sausage.id, Decimal("5"))]

    order = await builder.enter_date(CHAT_ID, "2026-01-25")
    assert [i.product_id for i in order.items] == [sausage.id]
    assert order.order_date == datetime(2026, 1, 24)


async def test_product_cannot_be_selected_twice(store, builder, distributor, sausage):
    await builder.start(CHAT_ID, distributor.id)
    await builder.select_product(CHAT_ID, sausage.id)
    await builder.enter_quantity(CHAT_ID, "5")

    with pytest.raises(ValidationError):
        await builder.select_product(CHAT_ID, sausage.id)
    order_session = store.get(CHAT_ID)
    assert order_session.step == SELECTING_PRODUCTS
    assert len(order_session.items) == 1
