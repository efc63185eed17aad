import logging
from typing import Any, Awaitable, Callable, Dict
from aiogram import BaseMiddleware
from aiogram.types import Update, Message, CallbackQuery, User as TgUser

from meatline.database.database import get_session
from meatline.services.user_service import UserService
from meatline.translate import t

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseMiddleware):
    """Загрузка пользователя по Telegram ID и сессии БД в контекст.

    Неизвестный пользователь регистрируется неактивным дистрибьютором.
    Неактивный пользователь дальше middleware не проходит.
    """

    async def __call__(
        self,
        handler: Callable[[Update, Dict[str, Any]], Awaitable[Any]],
        event: Update,
        data: Dict[str, Any]
    ) -> Any:
        tg_user: TgUser = data.get("event_from_user")
        if not tg_user:
            return await handler(event, data)

        async for session in get_session():
            user_service = UserService(session)
            user = await user_service.get_or_create_user(
                tg_user.id, tg_user.full_name, tg_user.language_code
            )
            await session.commit()

            if not user.is_active:
                logger.info("Inactive user %s tried to use the bot", tg_user.id)
                await self._answer(event, t(user.lang, "registration_pending"))
                return None

            data["user"] = user
            data["lang"] = user.lang or "uz"
            data["session"] = session
            data["user_service"] = user_service
            return await handler(event, data)

    @staticmethod
    async def _answer(event, text: str) -> None:
        if isinstance(event, Message):
            await event.answer(text)
        elif isinstance(event, CallbackQuery):
            await event.answer(text, show_alert=True)
