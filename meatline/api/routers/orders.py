from datetime import datetime
from typing import Optional

from aiogram import Bot
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import User, OrderStatusEnum
from meatline.schemas import (
    OrderCreate, OrderUpdate, OrderStatusUpdate, OrderItemAdjust, OrderResponse, OrderItemResponse
)
from meatline.services import OrderService
from meatline.exceptions import ValidationError
from meatline.utils.validators import parse_date, day_bounds
from meatline.api.deps import get_db, get_current_user, require_manager, get_bot
from meatline.api.responses import ok, dump, dump_list

router = APIRouter(prefix="/orders", tags=["orders"])


def _date_param(value: Optional[str], name: str) -> Optional[datetime]:
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"{name} must be in YYYY-MM-DD format")
    return parsed


@router.get("")
async def list_orders(
    status: Optional[OrderStatusEnum] = None,
    start_date: Optional[str] = Query(default=None),
    end_date: Optional[str] = Query(default=None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Дистрибьютор видит только свои заказы; end_date включает весь день"""
    start = _date_param(start_date, "start_date")
    end = _date_param(end_date, "end_date")
    if end is not None:
        end = day_bounds(end)[1]
    orders = await OrderService(session).list_orders(user, status=status, start_date=start, end_date=end)
    return ok(dump_list(OrderResponse, orders))


@router.get("/{order_id}")
async def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    order = await OrderService(session).get_order(user, order_id)
    return ok(dump(OrderResponse, order))


@router.post("", status_code=201)
async def create_order(
    body: OrderCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    order = await OrderService(session).create_order(
        user,
        order_date=body.order_date,
        delivery_date=body.delivery_date,
        items=[item.model_dump() for item in body.items],
        notes=body.notes,
        distributor_id=body.distributor_id,
    )
    return ok(dump(OrderResponse, order))


@router.put("/{order_id}")
async def update_order(
    order_id: int,
    body: OrderUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    order = await OrderService(session).update_order(user, order_id, body.model_dump(exclude_unset=True))
    return ok(dump(OrderResponse, order))


@router.patch("/{order_id}/status")
async def update_status(
    order_id: int,
    body: OrderStatusUpdate,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
    bot: Optional[Bot] = Depends(get_bot),
):
    order = await OrderService(session, bot).update_status(user, order_id, body.status, body.notes)
    return ok(dump(OrderResponse, order))


@router.delete("/{order_id}")
async def delete_order(
    order_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await OrderService(session).delete_order(user, order_id)
    return ok(message="Order deleted")


@router.get("/{order_id}/items")
async def get_order_items(
    order_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    items = await OrderService(session).get_order_items(user, order_id)
    return ok(dump_list(OrderItemResponse, items))


@router.patch("/{order_id}/items/{item_id}")
async def adjust_item(
    order_id: int,
    item_id: int,
    body: OrderItemAdjust,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
    bot: Optional[Bot] = Depends(get_bot),
):
    item = await OrderService(session, bot).adjust_item(
        user, order_id, item_id, body.adjusted_quantity, body.adjustment_reason
    )
    return ok(dump(OrderItemResponse, item))


@router.delete("/{order_id}/items/{item_id}")
async def remove_item(
    order_id: int,
    item_id: int,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
    bot: Optional[Bot] = Depends(get_bot),
):
    order = await OrderService(session, bot).remove_item(user, order_id, item_id)
    return ok(dump(OrderResponse, order))
