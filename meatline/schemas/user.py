from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from meatline.models import RoleEnum


class UserBase(BaseModel):
    """Базовая схема пользователя"""
    telegram_id: int
    name: str
    phone: Optional[str] = None
    company_name: Optional[str] = None


class UserCreate(UserBase):
    """Создание пользователя"""
    role: RoleEnum = RoleEnum.DISTRIBUTOR
    lang: str = "uz"
    is_active: bool = False


class UserResponse(UserBase):
    """Ответ с данными пользователя"""
    id: int
    role: RoleEnum
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    telegram_id: Optional[int] = None


class TokenResponse(BaseModel):
    token: str
    user: UserResponse
