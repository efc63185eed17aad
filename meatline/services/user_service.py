import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.repositories import UserRepository
from meatline.schemas.user import UserCreate
from meatline.models import User, RoleEnum
from meatline.exceptions import UserNotFoundError, ValidationError, AuthenticationError
from meatline.config import config

logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def get_or_create_user(
        self, telegram_id: int, name: str, lang: Optional[str] = None
    ) -> User:
        """Получить пользователя или зарегистрировать неактивного дистрибьютора"""
        user = await self.user_repo.get_by_telegram_id(telegram_id)
        if not user:
            user_data = UserCreate(
                telegram_id=telegram_id,
                name=name or str(telegram_id),
                lang=lang if lang in ("uz", "ru") else config.DEFAULT_LANG,
                role=RoleEnum.DISTRIBUTOR,
                is_active=False,
            )
            user = await self.user_repo.create(User(**user_data.model_dump()))
            logger.info("New user registered: telegram_id=%s, id=%s", telegram_id, user.id)
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_telegram_id(self, telegram_id: int) -> User:
        user = await self.user_repo.get_by_telegram_id(telegram_id)
        if not user:
            raise UserNotFoundError(telegram_id)
        return user

    async def login(self, telegram_id: Optional[int]) -> User:
        """Проверка перед выдачей токена"""
        if not telegram_id:
            raise ValidationError("Telegram ID is required")
        user = await self.get_by_telegram_id(telegram_id)
        if not user.is_active:
            raise AuthenticationError("User is not active. Please wait for admin approval")
        return user

    async def get_pending(self) -> List[User]:
        return await self.user_repo.get_pending()

    async def approve(self, user_id: int, approved_by: User) -> User:
        await self.get_user(user_id)
        user = await self.user_repo.update(user_id, {"is_active": True})
        logger.info("User %s approved by %s", user_id, approved_by.id)
        return user

    async def reject(self, user_id: int, rejected_by: User) -> None:
        """Отклонить заявку: неактивный пользователь удаляется"""
        user = await self.get_user(user_id)
        if user.is_active:
            raise ValidationError("Only pending users can be rejected")
        await self.session.delete(user)
        await self.session.flush()
        logger.info("User %s rejected by %s", user_id, rejected_by.id)

    async def set_language(self, user: User, lang: str) -> User:
        if lang not in ("uz", "ru"):
            raise ValidationError(f"Unsupported language: {lang}")
        user.lang = lang
        await self.session.flush()
        return user
