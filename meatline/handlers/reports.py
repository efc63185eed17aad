"""Дневной отчет и подтверждение новых пользователей"""
import logging
from datetime import date
from aiogram import Router, types, F

from meatline.models import User
from meatline.services import ProductionService, UserService
from meatline.exceptions import MeatlineException
from meatline.translate import t, all_translations
from meatline.utils.permissions import can_manage_orders
from meatline.handlers.common import back_keyboard, fmt_qty

router = Router()
logger = logging.getLogger(__name__)


@router.message(F.text.in_(all_translations("menu_reports")))
async def daily_report(message: types.Message, user: User, lang: str, session):
    if not can_manage_orders(user.role):
        await message.answer(t(lang, "unauthorized"))
        return

    today = date.today()
    summary = await ProductionService(session).daily_summary(today)
    if not summary.total_orders:
        await message.answer(t(lang, "no_orders_today"))
        return

    rows = "\n\n".join(
        t(lang, "report_row", index=i, name=row.product_name, code=row.product_code,
          quantity=fmt_qty(row.total_quantity), unit=row.unit, count=row.order_count)
        for i, row in enumerate(summary.summary, 1)
    )
    await message.answer(
        t(lang, "daily_report", date=today.isoformat(), total=summary.total_orders, rows=rows),
        reply_markup=back_keyboard(lang),
    )


@router.message(F.text.in_(all_translations("menu_users")))
async def pending_users(message: types.Message, user: User, lang: str, session):
    """Каждый ожидающий пользователь отдельным сообщением с кнопками"""
    if not can_manage_orders(user.role):
        await message.answer(t(lang, "unauthorized"))
        return

    users = await UserService(session).get_pending()
    if not users:
        await message.answer(t(lang, "no_pending_users"))
        return

    for pending in users:
        kb = types.InlineKeyboardMarkup(inline_keyboard=[[
            types.InlineKeyboardButton(text=t(lang, "approve"), callback_data=f"approve_user:{pending.id}"),
            types.InlineKeyboardButton(text=t(lang, "reject"), callback_data=f"reject_user:{pending.id}"),
        ]])
        await message.answer(
            t(lang, "pending_user", name=pending.name, phone=pending.phone or "-", telegram_id=pending.telegram_id),
            reply_markup=kb,
        )


@router.callback_query(F.data.startswith("approve_user:") | F.data.startswith("reject_user:"))
async def decide_user(callback: types.CallbackQuery, user: User, lang: str, session):
    if not can_manage_orders(user.role):
        await callback.answer(t(lang, "unauthorized"), show_alert=True)
        return

    action, user_id = callback.data.split(":")
    service = UserService(session)
    try:
        target = await service.get_user(int(user_id))
        name, telegram_id, target_lang = target.name, target.telegram_id, target.lang
        if action == "approve_user":
            await service.approve(target.id, user)
        else:
            await service.reject(target.id, user)
        await session.commit()
    except MeatlineException as e:
        await session.rollback()
        await callback.answer(f"❌ {e.message}", show_alert=True)
        return

    if action == "approve_user":
        await callback.message.edit_text(t(lang, "user_approved", name=name))
        try:
            await callback.bot.send_message(telegram_id, t(target_lang, "account_approved"))
        except Exception:
            logger.warning("Could not notify approved user %s", telegram_id, exc_info=True)
    else:
        await callback.message.edit_text(t(lang, "user_rejected", name=name))
    await callback.answer()
