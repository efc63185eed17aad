from types import SimpleNamespace

import pytest

from meatline.models import RoleEnum, OrderStatusEnum
from meatline.utils.permissions import (
    can_manage_orders, is_owner, can_view_order, can_edit_order, can_delete_order
)


@pytest.mark.parametrize("role,expected", [
    (RoleEnum.DISTRIBUTOR, False),
    (RoleEnum.PRODUCER, True),
    (RoleEnum.ADMIN, True),
])
def test_can_manage_orders(role, expected):
    assert can_manage_orders(role) is expected


def test_is_owner():
    user = SimpleNamespace(id=5)
    assert is_owner(user, SimpleNamespace(distributor_id=5))
    assert not is_owner(user, SimpleNamespace(distributor_id=6))


def test_distributor_sees_only_own_orders():
    assert can_view_order(RoleEnum.DISTRIBUTOR, owns=True)
    assert not can_view_order(RoleEnum.DISTRIBUTOR, owns=False)
    assert can_view_order(RoleEnum.PRODUCER, owns=False)


@pytest.mark.parametrize("status,expected", [
    (OrderStatusEnum.DRAFT, True),
    (OrderStatusEnum.SUBMITTED, True),
    (OrderStatusEnum.CONFIRMED, False),
    (OrderStatusEnum.DELIVERED, False),
])
def test_distributor_edits_only_early_statuses(status, expected):
    assert can_edit_order(RoleEnum.DISTRIBUTOR, True, status) is expected


def test_manager_edits_any_status():
    assert can_edit_order(RoleEnum.ADMIN, False, OrderStatusEnum.IN_PRODUCTION)


def test_delete_requires_draft_for_everyone():
    assert can_delete_order(RoleEnum.DISTRIBUTOR, True, OrderStatusEnum.DRAFT)
    assert not can_delete_order(RoleEnum.DISTRIBUTOR, False, OrderStatusEnum.DRAFT)
    assert not can_delete_order(RoleEnum.ADMIN, False, OrderStatusEnum.SUBMITTED)
    assert can_delete_order(RoleEnum.PRODUCER, False, OrderStatusEnum.DRAFT)
