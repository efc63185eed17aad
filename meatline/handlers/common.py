"""Главное меню, /start, /help, профиль и общие функции для обработчиков"""
from decimal import Decimal
from aiogram import Router, types, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext

from meatline.models import User, OrderStatusEnum
from meatline.translate import t, all_translations
from meatline.utils.permissions import can_manage_orders

router = Router()

STATUS_EMOJI = {
    OrderStatusEnum.DRAFT: "📝",
    OrderStatusEnum.SUBMITTED: "📤",
    OrderStatusEnum.CONFIRMED: "✅",
    OrderStatusEnum.IN_PRODUCTION: "🔨",
    OrderStatusEnum.READY: "✅",
    OrderStatusEnum.DELIVERED: "📦",
    OrderStatusEnum.CANCELLED: "❌",
}


def fmt_qty(value) -> str:
    """12.50 -> 12.5, 3.00 -> 3"""
    if value is None:
        return "-"
    return f"{Decimal(value).normalize():f}"


def fmt_date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else "-"


def main_menu_keyboard(user: User) -> types.ReplyKeyboardMarkup:
    """Клавиатура главного меню по роли"""
    lang = user.lang or "uz"

    def button(key):
        return types.KeyboardButton(text=t(lang, key))

    if can_manage_orders(user.role):
        rows = [
            [button("menu_orders"), button("menu_reports")],
            [button("menu_users"), button("menu_notifications")],
            [button("menu_profile"), button("menu_help")],
        ]
    else:
        rows = [
            [button("menu_new_order"), button("menu_my_orders")],
            [button("menu_notifications"), button("menu_profile")],
            [button("menu_help")],
        ]
    return types.ReplyKeyboardMarkup(keyboard=rows, resize_keyboard=True)


def back_keyboard(lang: str) -> types.InlineKeyboardMarkup:
    return types.InlineKeyboardMarkup(inline_keyboard=[
        [types.InlineKeyboardButton(text=t(lang, "back"), callback_data="back_to_menu")]
    ])


@router.message(Command("start"))
async def start_cmd(message: types.Message, state: FSMContext, user: User, lang: str):
    await state.clear()
    await message.answer(t(lang, "welcome", name=user.name), reply_markup=main_menu_keyboard(user))


@router.message(Command("menu"))
async def menu_cmd(message: types.Message, state: FSMContext, user: User, lang: str):
    await state.clear()
    await message.answer(t(lang, "menu_title"), reply_markup=main_menu_keyboard(user))


@router.message(Command("help"))
@router.message(F.text.in_(all_translations("menu_help")))
async def help_cmd(message: types.Message, lang: str):
    await message.answer(t(lang, "help"))


@router.message(F.text.in_(all_translations("menu_profile")))
async def show_profile(message: types.Message, user: User, lang: str):
    await message.answer(
        t(lang, "profile",
          name=user.name,
          phone=user.phone or "-",
          company=user.company_name or "-",
          role=user.role.value),
        parse_mode="HTML",
    )


@router.callback_query(F.data == "back_to_menu")
async def back_to_menu(callback: types.CallbackQuery, state: FSMContext, user: User, lang: str):
    await state.clear()
    await callback.message.answer(t(lang, "menu_title"), reply_markup=main_menu_keyboard(user))
    await callback.answer()
