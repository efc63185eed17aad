from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import User
from meatline.schemas import LoginRequest, UserResponse
from meatline.services import UserService
from meatline.api.deps import get_db, get_current_user, require_manager
from meatline.api.responses import ok, dump, dump_list
from meatline.api.security import create_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, session: AsyncSession = Depends(get_db)):
    """Вход по Telegram ID: только активные пользователи получают токен"""
    user = await UserService(session).login(body.telegram_id)
    return ok({"token": create_token(user), "user": dump(UserResponse, user)})


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return ok(dump(UserResponse, user))


@router.get("/pending")
async def pending_users(
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    users = await UserService(session).get_pending()
    return ok(dump_list(UserResponse, users))


@router.patch("/approve/{user_id}")
async def approve_user(
    user_id: int,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    approved = await UserService(session).approve(user_id, user)
    return ok(dump(UserResponse, approved), message="User approved")


@router.delete("/reject/{user_id}")
async def reject_user(
    user_id: int,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    await UserService(session).reject(user_id, user)
    return ok(message="User rejected")
