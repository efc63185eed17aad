from aiogram import Router, types, F

from meatline.models import User
from meatline.services import NotificationService
from meatline.services.notification_service import TYPE_EMOJI
from meatline.translate import t, all_translations
from meatline.handlers.common import back_keyboard

router = Router()

NOTIFICATIONS_LIMIT = 10


@router.message(F.text.in_(all_translations("menu_notifications")))
async def show_notifications(message: types.Message, user: User, lang: str, session):
    """Последние уведомления, непрочитанные отмечены точкой"""
    service = NotificationService(session)
    notifications = await service.get_user_notifications(user, limit=NOTIFICATIONS_LIMIT)
    if not notifications:
        await message.answer(t(lang, "no_notifications"))
        return

    unread = await service.count_unread(user)
    lines = [t(lang, "notifications_title", unread=unread), ""]
    for n in notifications:
        marker = "🔵 " if not n.is_read else ""
        lines.append(f"{marker}{TYPE_EMOJI.get(n.type, '📋')} <b>{n.title}</b>")
        lines.append(n.message)
        lines.append(f"<i>{n.created_at:%Y-%m-%d %H:%M}</i>\n")

    rows = []
    if unread:
        rows.append([types.InlineKeyboardButton(text=t(lang, "mark_all_read"), callback_data="notifications_read_all")])
    rows.extend(back_keyboard(lang).inline_keyboard)
    await message.answer("\n".join(lines), parse_mode="HTML",
                         reply_markup=types.InlineKeyboardMarkup(inline_keyboard=rows))


@router.callback_query(F.data == "notifications_read_all")
async def mark_all_read(callback: types.CallbackQuery, user: User, lang: str, session):
    count = await NotificationService(session).mark_all_as_read(user)
    await session.commit()
    await callback.message.edit_reply_markup(reply_markup=back_keyboard(lang))
    await callback.answer(t(lang, "all_marked_read", count=count))
