import re
from datetime import datetime
from decimal import Decimal

import pytest

from meatline.models import RoleEnum, BatchStatusEnum, ProductUnitEnum
from meatline.schemas.product import ProductCreate, ProductUpdate
from meatline.exceptions import (
    ValidationError, AuthenticationError, ConflictError,
    UserNotFoundError, ProductNotFoundError, BatchNotFoundError,
)
from meatline.services import UserService, ProductService, ProductionService, OrderService


class TestUserService:

    async def test_new_user_is_inactive_distributor(self, session):
        user = await UserService(session).get_or_create_user(777, "Yangi foydalanuvchi", "ru")
        assert user.role == RoleEnum.DISTRIBUTOR
        assert user.is_active is False
        assert user.lang == "ru"

    async def test_existing_user_is_returned(self, session, distributor):
        user = await UserService(session).get_or_create_user(distributor.telegram_id, "Boshqa ism", "en")
        assert user.id == distributor.id
        assert user.name == "Distribyutor Aziz"

    async def test_unknown_language_falls_back(self, session):
        user = await UserService(session).get_or_create_user(778, "Ism", "en")
        assert user.lang == "uz"

    async def test_login(self, session, distributor, pending_user):
        service = UserService(session)
        assert (await service.login(distributor.telegram_id)).id == distributor.id
        with pytest.raises(AuthenticationError):
            await service.login(pending_user.telegram_id)
        with pytest.raises(UserNotFoundError):
            await service.login(999)
        with pytest.raises(ValidationError):
            await service.login(None)

    async def test_approve_and_reject(self, session, admin, pending_user):
        service = UserService(session)
        assert [u.id for u in await service.get_pending()] == [pending_user.id]

        approved = await service.approve(pending_user.id, admin)
        assert approved.is_active is True
        assert await service.get_pending() == []
        with pytest.raises(ValidationError):
            await service.reject(pending_user.id, admin)

    async def test_reject_deletes_pending_user(self, session, admin, pending_user):
        service = UserService(session)
        await service.reject(pending_user.id, admin)
        with pytest.raises(UserNotFoundError):
            await service.get_user(pending_user.id)

    async def test_set_language(self, session, distributor):
        service = UserService(session)
        assert (await service.set_language(distributor, "ru")).lang == "ru"
        with pytest.raises(ValidationError):
            await service.set_language(distributor, "de")


class TestProductService:

    async def test_create_and_duplicate_code(self, session, sausage):
        service = ProductService(session)
        product = await service.create_product(ProductCreate(code="KOLBASA-003", name="Servelat"))
        assert product.unit == ProductUnitEnum.KG
        assert product.is_active is True

        with pytest.raises(ConflictError):
            await service.create_product(ProductCreate(code="KOLBASA-001", name="Dublikat"))

    async def test_update(self, session, sausage, sardelka):
        service = ProductService(session)
        updated = await service.update_product(sausage.id, ProductUpdate(is_active=False))
        assert updated.is_active is False
        assert updated.name == "Doktorskaya kolbasa"

        with pytest.raises(ConflictError):
            await service.update_product(sausage.id, ProductUpdate(code="KOLBASA-002"))
        with pytest.raises(ProductNotFoundError):
            await service.update_product(404, ProductUpdate(name="Yo'q"))

    async def test_active_filter(self, session, sausage, archived_product):
        service = ProductService(session)
        assert [p.id for p in await service.get_active_products()] == [sausage.id]
        assert [p.id for p in await service.list_products(is_active=False)] == [archived_product.id]
        assert len(await service.list_products()) == 2

    async def test_delete_unused_product(self, session, sardelka):
        service = ProductService(session)
        await service.delete_product(sardelka.id)
        with pytest.raises(ProductNotFoundError):
            await service.get_product(sardelka.id)

    async def test_product_in_orders_cannot_be_deleted(self, session, distributor, sausage):
        await OrderService(session).create_order(
            distributor, datetime(2026, 1, 11), datetime(2026, 1, 12),
            [{"product_id": sausage.id, "quantity": 1}],
        )
        with pytest.raises(ConflictError):
            await ProductService(session).delete_product(sausage.id)


class TestBatches:

    async def test_create_batch(self, session, producer, sausage, sardelka):
        batch = await ProductionService(session).create_batch(
            producer, datetime(2026, 1, 24), Decimal("100"),
            [
                {"product_id": sausage.id, "planned_quantity": Decimal("60")},
                {"product_id": sardelka.id, "planned_quantity": Decimal("40")},
            ],
        )
        assert re.fullmatch(r"BATCH-\d{8}-\d{3}", batch.batch_number)
        assert batch.status == BatchStatusEnum.PLANNED
        assert batch.used_capacity == Decimal("100")
        assert len(batch.items) == 2

    async def test_capacity_is_checked(self, session, producer, sausage):
        service = ProductionService(session)
        with pytest.raises(ValidationError):
            await service.create_batch(
                producer, datetime(2026, 1, 24), Decimal("10"),
                [{"product_id": sausage.id, "planned_quantity": Decimal("10.5")}],
            )
        with pytest.raises(ValidationError):
            await service.create_batch(producer, datetime(2026, 1, 24), Decimal("10"), [])
        with pytest.raises(ProductNotFoundError):
            await service.create_batch(
                producer, datetime(2026, 1, 24), Decimal("10"),
                [{"product_id": 404, "planned_quantity": Decimal("1")}],
            )

    async def test_update_batch(self, session, producer, sausage):
        service = ProductionService(session)
        batch = await service.create_batch(
            producer, datetime(2026, 1, 24), Decimal("50"),
            [{"product_id": sausage.id, "planned_quantity": Decimal("50")}],
        )

        updated = await service.update_batch(
            batch.id,
            status=BatchStatusEnum.COMPLETED,
            notes="Tayyor",
            actual_quantities=[{"item_id": batch.items[0].id, "actual_quantity": Decimal("48.5")}],
        )

        assert updated.status == BatchStatusEnum.COMPLETED
        assert updated.notes == "Tayyor"
        assert updated.items[0].actual_quantity == Decimal("48.5")
        assert [b.id for b in await service.list_batches(status=BatchStatusEnum.COMPLETED)] == [batch.id]

    async def test_missing_batch(self, session):
        with pytest.raises(BatchNotFoundError):
            await ProductionService(session).get_batch(404)
