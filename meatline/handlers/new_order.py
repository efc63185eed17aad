from datetime import date
from typing import List
from aiogram import Router, types, F
from aiogram.filters import BaseFilter

from meatline.models import User, Product
from meatline.services import OrderBuilder
from meatline.exceptions import MeatlineException, ValidationError
from meatline.translate import t, all_translations
from meatline.utils.sessions import OrderSessionStore, ENTERING_QUANTITY, SELECTING_DATES
from meatline.handlers.common import main_menu_keyboard, fmt_qty, fmt_date

router = Router()


class BuilderStep(BaseFilter):
    """Сообщение относится к сессии конструктора на заданном шаге"""

    def __init__(self, step: str):
        self.step = step

    async def __call__(self, message: types.Message, order_store: OrderSessionStore) -> bool:
        order_session = order_store.get(message.chat.id)
        return order_session is not None and order_session.step == self.step


def products_keyboard(products: List[Product], lang: str) -> types.InlineKeyboardMarkup:
    rows = [
        [types.InlineKeyboardButton(text=f"{p.name} ({p.code})", callback_data=f"select_product:{p.id}")]
        for p in products
    ]
    rows.append([types.InlineKeyboardButton(text=t(lang, "confirm_order_button"), callback_data="confirm_order")])
    rows.append([types.InlineKeyboardButton(text=t(lang, "cancel"), callback_data="cancel_order")])
    return types.InlineKeyboardMarkup(inline_keyboard=rows)


@router.message(F.text.in_(all_translations("menu_new_order")))
async def start_new_order(message: types.Message, user: User, lang: str, session, order_store: OrderSessionStore):
    builder = OrderBuilder(session, order_store)
    products = await builder.start(message.chat.id, user.id)
    if not products:
        await message.answer(t(lang, "no_products"))
        return
    await message.answer(t(lang, "new_order_title"), reply_markup=products_keyboard(products, lang))


@router.callback_query(F.data.startswith("select_product:"))
async def select_product(callback: types.CallbackQuery, lang: str, session, order_store: OrderSessionStore):
    try:
        product_id = int(callback.data.split(":")[1])
    except (IndexError, ValueError):
        await callback.answer(t(lang, "error"), show_alert=True)
        return

    builder = OrderBuilder(session, order_store)
    try:
        order_session = await builder.select_product(callback.message.chat.id, product_id)
    except MeatlineException as e:
        await callback.answer(e.message, show_alert=True)
        return

    if not order_session:
        await callback.answer(t(lang, "session_not_found"), show_alert=True)
        return

    product = await builder.product_repo.get(product_id)
    await callback.message.edit_text(
        t(lang, "product_selected", name=product.name, unit=product.unit.value),
        reply_markup=types.InlineKeyboardMarkup(inline_keyboard=[
            [types.InlineKeyboardButton(text=t(lang, "cancel"), callback_data="cancel_order")]
        ]),
    )
    await callback.answer()


@router.message(BuilderStep(ENTERING_QUANTITY), F.text)
async def enter_quantity(message: types.Message, lang: str, session, order_store: OrderSessionStore):
    builder = OrderBuilder(session, order_store)
    try:
        remaining = await builder.enter_quantity(message.chat.id, message.text)
    except ValidationError:
        await message.answer(t(lang, "invalid_quantity"))
        return
    if remaining is None:
        return

    order_session = order_store.get(message.chat.id)
    items = "\n".join(
        f"{i}. {item.product_name} - {fmt_qty(item.quantity)}"
        for i, item in enumerate(order_session.items, 1)
    )
    await message.answer(t(lang, "selected_items", items=items), reply_markup=products_keyboard(remaining, lang))


@router.callback_query(F.data == "confirm_order")
async def confirm_order(callback: types.CallbackQuery, lang: str, session, order_store: OrderSessionStore):
    builder = OrderBuilder(session, order_store)
    try:
        order_session = await builder.confirm(callback.message.chat.id)
    except ValidationError:
        await callback.answer(t(lang, "empty_order"), show_alert=True)
        return

    if not order_session:
        await callback.answer(t(lang, "session_not_found"), show_alert=True)
        return
    await callback.message.edit_text(t(lang, "ask_order_date", example=date.today().isoformat()))
    await callback.answer()


@router.message(BuilderStep(SELECTING_DATES), F.text)
async def enter_date(message: types.Message, user: User, lang: str, session, order_store: OrderSessionStore):
    builder = OrderBuilder(session, order_store, bot=message.bot)
    try:
        order = await builder.enter_date(message.chat.id, message.text)
    except ValidationError:
        await message.answer(t(lang, "invalid_date"))
        return
    except MeatlineException as e:
        await session.rollback()
        await message.answer(f"❌ {e.message}")
        return

    if order is None:
        await message.answer(t(lang, "ask_delivery_date"))
        return

    await session.commit()
    items = "\n".join(
        f"{i}. {item.product.name} - {fmt_qty(item.quantity)} {item.product.unit.value}"
        for i, item in enumerate(order.items, 1)
    )
    await message.answer(
        t(lang, "order_created",
          number=order.order_number,
          order_date=fmt_date(order.order_date),
          delivery_date=fmt_date(order.delivery_date),
          status=order.status.value,
          items=items),
        reply_markup=main_menu_keyboard(user),
    )


@router.callback_query(F.data == "cancel_order")
async def cancel_order(callback: types.CallbackQuery, user: User, lang: str, session, order_store: OrderSessionStore):
    await OrderBuilder(session, order_store).cancel(callback.message.chat.id)
    await callback.message.answer(t(lang, "order_cancelled"), reply_markup=main_menu_keyboard(user))
    await callback.answer()
