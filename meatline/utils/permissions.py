"""Проверки прав по роли, владению и статусу заказа"""
from meatline.models import RoleEnum, OrderStatusEnum, Order, User

MANAGER_ROLES = (RoleEnum.PRODUCER, RoleEnum.ADMIN)
DISTRIBUTOR_EDITABLE_STATUSES = (OrderStatusEnum.DRAFT, OrderStatusEnum.SUBMITTED)


def can_manage_orders(role: RoleEnum) -> bool:
    """Смена статуса, корректировка количества, партии"""
    return role in MANAGER_ROLES


def is_owner(user: User, order: Order) -> bool:
    return order.distributor_id == user.id


def can_view_order(role: RoleEnum, owns: bool) -> bool:
    if role == RoleEnum.DISTRIBUTOR:
        return owns
    return True


def can_edit_order(role: RoleEnum, owns: bool, status: OrderStatusEnum) -> bool:
    if role == RoleEnum.DISTRIBUTOR:
        return owns and status in DISTRIBUTOR_EDITABLE_STATUSES
    return True


def can_delete_order(role: RoleEnum, owns: bool, status: OrderStatusEnum) -> bool:
    if status != OrderStatusEnum.DRAFT:
        return False
    if role == RoleEnum.DISTRIBUTOR:
        return owns
    return True
