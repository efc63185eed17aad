from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import User
from meatline.schemas import NotificationResponse
from meatline.services import NotificationService
from meatline.api.deps import get_db, get_current_user
from meatline.api.responses import ok, dump, dump_list

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    is_read: Optional[bool] = None,
    limit: int = Query(default=50, ge=1, le=200),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    service = NotificationService(session)
    notifications = await service.get_user_notifications(user, is_read, limit)
    unread_count = await service.count_unread(user)
    return ok(dump_list(NotificationResponse, notifications), unread_count=unread_count)


@router.patch("/read-all")
async def mark_all_read(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    count = await NotificationService(session).mark_all_as_read(user)
    return ok({"count": count})


@router.get("/{notification_id}")
async def get_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    notification = await NotificationService(session).get_notification(user, notification_id)
    return ok(dump(NotificationResponse, notification))


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    notification = await NotificationService(session).mark_as_read(user, notification_id)
    return ok(dump(NotificationResponse, notification))


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await NotificationService(session).delete_notification(user, notification_id)
    return ok(message="Notification deleted")


@router.delete("")
async def delete_all_notifications(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    count = await NotificationService(session).delete_all(user)
    return ok({"count": count})
