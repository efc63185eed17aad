from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update

from meatline.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Общие операции: поиск по id, создание, частичное обновление"""

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model

    async def get(self, id: int) -> Optional[ModelType]:
        return await self.session.get(self.model, id)

    async def create(self, obj: ModelType) -> ModelType:
        """Добавить объект и получить серверные значения (id, даты)"""
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def update(self, id: int, values: dict) -> Optional[ModelType]:
        await self.session.execute(
            update(self.model).where(self.model.id == id).values(**values)
        )
        obj = await self.get(id)
        if obj is not None:
            await self.session.refresh(obj)
        return obj
