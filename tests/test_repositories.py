from datetime import datetime
from decimal import Decimal

import pytest

from meatline.repositories import UserRepository, ProductRepository, OrderRepository
from meatline.models import User, RoleEnum, OrderStatusEnum


class TestUserRepository:
    """Тесты репозитория пользователей"""

    async def test_create_user(self, session):
        repo = UserRepository(session)

        user = await repo.create(User(telegram_id=123456, name="Test User", role=RoleEnum.DISTRIBUTOR))

        assert user.id is not None
        assert user.is_active is False
        assert user.lang == "uz"

    async def test_get_by_telegram_id(self, session, distributor):
        repo = UserRepository(session)

        found = await repo.get_by_telegram_id(distributor.telegram_id)
        assert found is not None
        assert found.id == distributor.id
        assert await repo.get_by_telegram_id(1) is None

    async def test_get_by_role(self, session, distributor, other_distributor, producer, pending_user):
        repo = UserRepository(session)

        active = await repo.get_by_role(RoleEnum.DISTRIBUTOR)
        assert [u.id for u in active] == [distributor.id, other_distributor.id]
        everyone = await repo.get_by_role(RoleEnum.DISTRIBUTOR, active_only=False)
        assert pending_user.id in [u.id for u in everyone]

    async def test_update(self, session, distributor):
        repo = UserRepository(session)
        updated = await repo.update(distributor.id, {"phone": "+998901234567"})
        assert updated.phone == "+998901234567"


class TestProductRepository:

    async def test_get_by_code(self, session, sausage):
        repo = ProductRepository(session)
        assert (await repo.get_by_code("KOLBASA-001")).id == sausage.id
        assert await repo.get_by_code("KOLBASA-404") is None

    async def test_recipe_is_stored_as_json(self, session, sausage):
        product = await ProductRepository(session).get(sausage.id)
        assert product.base_recipe["yield"] == 100
        assert product.production_parameters["temperature"] == 75


class TestOrderRepository:

    @pytest.fixture
    async def order(self, session, distributor, sausage):
        repo = OrderRepository(session)
        order = await repo.create_with_items(
            {
                "order_number": "ORD-20260124-0001",
                "distributor_id": distributor.id,
                "order_date": datetime(2026, 1, 24, 10),
                "delivery_date": datetime(2026, 1, 25, 10),
                "status": OrderStatusEnum.DRAFT,
                "total_amount": Decimal("0"),
            },
            [{
                "product_id": sausage.id,
                "quantity": Decimal("3"),
                "original_quantity": Decimal("3"),
                "unit_price": Decimal("0"),
                "total_price": Decimal("0"),
            }],
        )
        return order

    async def test_get_with_items(self, session, order, sausage):
        loaded = await OrderRepository(session).get_with_items(order.id)
        assert loaded.items[0].product.code == "KOLBASA-001"
        assert loaded.distributor.name == "Distribyutor Aziz"
        assert loaded.status_history == []

    async def test_number_exists(self, session, order):
        repo = OrderRepository(session)
        assert await repo.number_exists("ORD-20260124-0001") is True
        assert await repo.number_exists("ORD-20260124-0002") is False

    async def test_list_filters(self, session, order, distributor, other_distributor):
        repo = OrderRepository(session)
        assert [o.id for o in await repo.list_orders(distributor_id=distributor.id)] == [order.id]
        assert await repo.list_orders(distributor_id=other_distributor.id) == []
        assert await repo.list_orders(status=OrderStatusEnum.CONFIRMED) == []
        in_range = await repo.list_orders(
            start_date=datetime(2026, 1, 24), end_date=datetime(2026, 1, 24, 23, 59, 59)
        )
        assert [o.id for o in in_range] == [order.id]

    async def test_history_and_items(self, session, order, producer):
        repo = OrderRepository(session)
        await repo.add_status_history(order.id, OrderStatusEnum.SUBMITTED, producer.id, "ok")

        history = await repo.get_history(order.id)
        assert [h.status for h in history] == [OrderStatusEnum.SUBMITTED]
        assert await repo.count_items(order.id) == 1
        item_id = (await repo.get_with_items(order.id)).items[0].id
        assert await repo.get_item(order.id, item_id) is not None
        assert await repo.get_item(order.id + 1, item_id) is None
