"""Изменение количества позиции заказа производителем"""
from aiogram import Router, types, F
from aiogram.fsm.state import State, StatesGroup
from aiogram.fsm.context import FSMContext

from meatline.models import User
from meatline.services import OrderService
from meatline.exceptions import MeatlineException, ValidationError
from meatline.translate import t
from meatline.utils.permissions import can_manage_orders
from meatline.utils.validators import parse_quantity, sanitize_text
from meatline.handlers.common import fmt_qty

router = Router()


class AdjustQuantity(StatesGroup):
    ENTER_QUANTITY = State()
    CONFIRM_REMOVE = State()
    ENTER_REASON = State()


@router.callback_query(F.data.startswith("adjust:"))
async def choose_item(callback: types.CallbackQuery, state: FSMContext, user: User, lang: str, session):
    """adjust:<order_id> - список позиций заказа"""
    if not can_manage_orders(user.role):
        await callback.answer(t(lang, "unauthorized"), show_alert=True)
        return
    try:
        order_id = int(callback.data.split(":")[1])
    except (IndexError, ValueError):
        await callback.answer(t(lang, "error"), show_alert=True)
        return

    try:
        items = await OrderService(session).get_order_items(user, order_id)
    except MeatlineException as e:
        await callback.answer(f"❌ {e.message}", show_alert=True)
        return

    await state.clear()
    rows = [
        [types.InlineKeyboardButton(
            text=f"{item.product.name} - {fmt_qty(item.effective_quantity)} {item.product.unit.value}",
            callback_data=f"adjust_item:{order_id}:{item.id}",
        )]
        for item in items
    ]
    rows.append([types.InlineKeyboardButton(text=t(lang, "back"), callback_data=f"order:{order_id}")])
    await callback.message.edit_text(t(lang, "choose_item"), reply_markup=types.InlineKeyboardMarkup(inline_keyboard=rows))
    await callback.answer()


@router.callback_query(F.data.startswith("adjust_item:"))
async def ask_quantity(callback: types.CallbackQuery, state: FSMContext, user: User, lang: str, session):
    """adjust_item:<order_id>:<item_id> - запросить новое количество"""
    if not can_manage_orders(user.role):
        await callback.answer(t(lang, "unauthorized"), show_alert=True)
        return
    try:
        _, order_id, item_id = callback.data.split(":")
        order_id, item_id = int(order_id), int(item_id)
    except ValueError:
        await callback.answer(t(lang, "error"), show_alert=True)
        return

    try:
        items = await OrderService(session).get_order_items(user, order_id)
    except MeatlineException as e:
        await callback.answer(f"❌ {e.message}", show_alert=True)
        return
    item = next((i for i in items if i.id == item_id), None)
    if not item:
        await callback.answer(t(lang, "order_not_found"), show_alert=True)
        return

    await state.set_state(AdjustQuantity.ENTER_QUANTITY)
    await state.update_data(order_id=order_id, item_id=item_id, product_name=item.product.name,
                            old_quantity=fmt_qty(item.effective_quantity))
    await callback.message.answer(
        t(lang, "ask_new_quantity", name=item.product.name, quantity=fmt_qty(item.effective_quantity))
    )
    await callback.answer()


@router.message(AdjustQuantity.ENTER_QUANTITY, F.text)
async def enter_quantity(message: types.Message, state: FSMContext, lang: str):
    quantity = parse_quantity(message.text)
    if quantity is None or quantity < 0:
        await message.answer(t(lang, "invalid_quantity"))
        return

    data = await state.get_data()
    if quantity == 0:
        await state.set_state(AdjustQuantity.CONFIRM_REMOVE)
        kb = types.InlineKeyboardMarkup(inline_keyboard=[[
            types.InlineKeyboardButton(text=t(lang, "yes"), callback_data="remove_yes"),
            types.InlineKeyboardButton(text=t(lang, "no"), callback_data="remove_no"),
        ]])
        await message.answer(t(lang, "confirm_remove", name=data["product_name"]), reply_markup=kb)
        return

    await state.update_data(new_quantity=str(quantity))
    await state.set_state(AdjustQuantity.ENTER_REASON)
    await message.answer(t(lang, "ask_reason"))


@router.callback_query(AdjustQuantity.CONFIRM_REMOVE, F.data.in_({"remove_yes", "remove_no"}))
async def confirm_remove(callback: types.CallbackQuery, state: FSMContext, user: User, lang: str, session):
    data = await state.get_data()
    await state.clear()

    if callback.data == "remove_no":
        await callback.message.edit_text(t(lang, "menu_title"))
        await callback.answer()
        return

    try:
        await OrderService(session, bot=callback.bot).remove_item(user, data["order_id"], data["item_id"])
        await session.commit()
    except ValidationError:
        await session.rollback()
        await callback.message.edit_text(t(lang, "last_item"))
        await callback.answer()
        return
    except MeatlineException as e:
        await session.rollback()
        await callback.answer(f"❌ {e.message}", show_alert=True)
        return

    await callback.message.edit_text(t(lang, "item_removed", name=data["product_name"]))
    await callback.answer()


@router.message(AdjustQuantity.ENTER_REASON, F.text)
async def enter_reason(message: types.Message, state: FSMContext, user: User, lang: str, session):
    reason = sanitize_text(message.text)
    if not reason:
        await message.answer(t(lang, "ask_reason"))
        return

    data = await state.get_data()
    await state.clear()
    try:
        item = await OrderService(session, bot=message.bot).adjust_item(
            user, data["order_id"], data["item_id"], parse_quantity(data["new_quantity"]), reason
        )
        await session.commit()
    except MeatlineException as e:
        await session.rollback()
        await message.answer(f"❌ {e.message}")
        return

    await message.answer(t(lang, "quantity_changed", name=data["product_name"],
                           old=data["old_quantity"], new=fmt_qty(item.adjusted_quantity)))
