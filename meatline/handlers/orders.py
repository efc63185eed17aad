from datetime import date
from aiogram import Router, types, F

from meatline.models import User, OrderStatusEnum
from meatline.services import OrderService
from meatline.exceptions import MeatlineException, NotFoundError
from meatline.translate import t, all_translations
from meatline.utils.permissions import can_manage_orders
from meatline.utils.validators import day_bounds
from meatline.handlers.common import STATUS_EMOJI, back_keyboard, fmt_date, fmt_qty

router = Router()

MY_ORDERS_LIMIT = 10
PRODUCER_ORDERS_LIMIT = 15
PENDING_STATUSES = [OrderStatusEnum.SUBMITTED, OrderStatusEnum.CONFIRMED]


def filters_keyboard(orders, lang: str) -> types.InlineKeyboardMarkup:
    rows = [
        [types.InlineKeyboardButton(
            text=f"{STATUS_EMOJI.get(o.status, '📋')} {o.order_number}", callback_data=f"order:{o.id}"
        )]
        for o in orders
    ]
    rows.extend([
        [
            types.InlineKeyboardButton(text=t(lang, "filter_today"), callback_data="orders_today"),
            types.InlineKeyboardButton(text=t(lang, "filter_pending"), callback_data="orders_pending"),
        ],
        [types.InlineKeyboardButton(text=t(lang, "filter_all"), callback_data="orders_all")],
        [types.InlineKeyboardButton(text=t(lang, "back"), callback_data="back_to_menu")],
    ])
    return types.InlineKeyboardMarkup(inline_keyboard=rows)


def order_details_text(order) -> str:
    lines = [
        f"{STATUS_EMOJI.get(order.status, '📋')} <b>{order.order_number}</b>",
        f"👤 {order.distributor.name}" + (f" ({order.distributor.company_name})" if order.distributor.company_name else ""),
        f"📅 {fmt_date(order.order_date)} → {fmt_date(order.delivery_date)}",
        f"📊 {order.status.value}",
        "",
    ]
    for i, item in enumerate(order.items, 1):
        line = f"{i}. {item.product.name} - {fmt_qty(item.effective_quantity)} {item.product.unit.value}"
        if item.adjusted_quantity is not None:
            line += f" (<s>{fmt_qty(item.quantity)}</s>)"
        lines.append(line)
    if order.notes:
        lines.append(f"\n📝 {order.notes}")
    return "\n".join(lines)


def status_keyboard(order, lang: str) -> types.InlineKeyboardMarkup:
    buttons = [
        types.InlineKeyboardButton(
            text=f"{STATUS_EMOJI[status]} {status.value}", callback_data=f"status:{order.id}:{status.value}"
        )
        for status in OrderStatusEnum if status != order.status
    ]
    rows = [buttons[i:i + 2] for i in range(0, len(buttons), 2)]
    rows.append([types.InlineKeyboardButton(text=t(lang, "change_quantity_button"), callback_data=f"adjust:{order.id}")])
    rows.append([types.InlineKeyboardButton(text=t(lang, "back"), callback_data="orders_all")])
    return types.InlineKeyboardMarkup(inline_keyboard=rows)


@router.message(F.text.in_(all_translations("menu_my_orders")))
async def show_my_orders(message: types.Message, user: User, lang: str, session):
    """Последние заказы дистрибьютора"""
    orders = await OrderService(session).list_orders(user, limit=MY_ORDERS_LIMIT)
    if not orders:
        await message.answer(t(lang, "no_orders"))
        return

    lines = [t(lang, "my_orders_title"), ""]
    for i, order in enumerate(orders, 1):
        lines.append(f"{i}. {STATUS_EMOJI.get(order.status, '📋')} {order.order_number}")
        lines.append(f"   📅 {fmt_date(order.order_date)}")
        lines.append(f"   📊 {order.status.value}")
        lines.append(f"   📦 {len(order.items)}\n")
    await message.answer("\n".join(lines), reply_markup=back_keyboard(lang))


async def _send_orders(target: types.Message, user: User, lang: str, session, order_filter: str, edit: bool = False):
    service = OrderService(session)
    if order_filter == "today":
        start, end = day_bounds(date.today())
        orders = await service.list_orders(user, start_date=start, end_date=end, limit=PRODUCER_ORDERS_LIMIT)
    elif order_filter == "pending":
        orders = await service.list_orders(user, statuses=PENDING_STATUSES, limit=PRODUCER_ORDERS_LIMIT)
    else:
        orders = await service.list_orders(user, limit=PRODUCER_ORDERS_LIMIT)

    text = t(lang, "orders_title", count=len(orders)) if orders else t(lang, "orders_empty")
    if edit:
        await target.edit_text(text, reply_markup=filters_keyboard(orders, lang))
    else:
        await target.answer(text, reply_markup=filters_keyboard(orders, lang))


@router.message(F.text.in_(all_translations("menu_orders")))
async def show_orders(message: types.Message, user: User, lang: str, session):
    if not can_manage_orders(user.role):
        await message.answer(t(lang, "unauthorized"))
        return
    await _send_orders(message, user, lang, session, "all")


@router.callback_query(F.data.in_({"orders_today", "orders_pending", "orders_all"}))
async def filter_orders(callback: types.CallbackQuery, user: User, lang: str, session):
    if not can_manage_orders(user.role):
        await callback.answer(t(lang, "unauthorized"), show_alert=True)
        return
    await _send_orders(callback.message, user, lang, session, callback.data.split("_")[1], edit=True)
    await callback.answer()


@router.callback_query(F.data.startswith("order:"))
async def show_order(callback: types.CallbackQuery, user: User, lang: str, session):
    try:
        order_id = int(callback.data.split(":")[1])
        order = await OrderService(session).get_order(user, order_id)
    except (IndexError, ValueError, NotFoundError):
        await callback.answer(t(lang, "order_not_found"), show_alert=True)
        return

    markup = status_keyboard(order, lang) if can_manage_orders(user.role) else back_keyboard(lang)
    await callback.message.edit_text(order_details_text(order), reply_markup=markup, parse_mode="HTML")
    await callback.answer()


@router.callback_query(F.data.startswith("status:"))
async def change_status(callback: types.CallbackQuery, user: User, lang: str, session):
    """status:<order_id>:<STATUS>"""
    try:
        _, order_id, status = callback.data.split(":")
        order_id = int(order_id)
        new_status = OrderStatusEnum(status)
    except ValueError:
        await callback.answer(t(lang, "error"), show_alert=True)
        return

    try:
        order = await OrderService(session, bot=callback.bot).update_status(user, order_id, new_status)
        await session.commit()
    except MeatlineException as e:
        await session.rollback()
        await callback.answer(f"❌ {e.message}", show_alert=True)
        return

    await callback.message.edit_text(
        order_details_text(order), reply_markup=status_keyboard(order, lang), parse_mode="HTML"
    )
    await callback.answer(t(lang, "status_changed", number=order.order_number, status=new_status.value))
