import pytest

from meatline.models import NotificationTypeEnum
from meatline.exceptions import AuthorizationError, NotificationNotFoundError
from meatline.services import NotificationService


class FakeBot:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_message(self, chat_id, text, **kwargs):
        if self.fail:
            raise RuntimeError("Telegram is unavailable")
        self.sent.append((chat_id, text))


async def fill_inbox(service, user, count=3):
    created = []
    for i in range(count):
        created.append(await service.create(
            user.id, NotificationTypeEnum.SYSTEM, f"Xabar {i}", f"Matn {i}"
        ))
    return created


async def test_inbox_newest_first(session, distributor):
    service = NotificationService(session)
    created = await fill_inbox(service, distributor)

    inbox = await service.get_user_notifications(distributor)
    assert [n.id for n in inbox] == [n.id for n in reversed(created)]
    assert await service.count_unread(distributor) == 3


async def test_filter_and_mark_read(session, distributor):
    service = NotificationService(session)
    first, *_ = await fill_inbox(service, distributor)

    marked = await service.mark_as_read(distributor, first.id)
    assert marked.is_read is True
    assert [n.id for n in await service.get_user_notifications(distributor, is_read=True)] == [first.id]
    assert len(await service.get_user_notifications(distributor, is_read=False)) == 2

    assert await service.mark_all_as_read(distributor) == 2
    assert await service.count_unread(distributor) == 0


async def test_only_recipient_has_access(session, distributor, other_distributor):
    service = NotificationService(session)
    notification, = await fill_inbox(service, distributor, count=1)

    with pytest.raises(AuthorizationError):
        await service.get_notification(other_distributor, notification.id)
    with pytest.raises(AuthorizationError):
        await service.mark_as_read(other_distributor, notification.id)
    with pytest.raises(AuthorizationError):
        await service.delete_notification(other_distributor, notification.id)
    with pytest.raises(NotificationNotFoundError):
        await service.get_notification(distributor, 404)


async def test_delete_one_and_all(session, distributor, other_distributor):
    service = NotificationService(session)
    first, *_ = await fill_inbox(service, distributor)
    await fill_inbox(service, other_distributor, count=1)

    await service.delete_notification(distributor, first.id)
    assert len(await service.get_user_notifications(distributor)) == 2

    assert await service.delete_all(distributor) == 2
    assert await service.get_user_notifications(distributor) == []
    assert len(await service.get_user_notifications(other_distributor)) == 1


async def test_notify_all_distributors(session, distributor, other_distributor, producer):
    service = NotificationService(session)
    assert await service.notify_all_distributors("E'lon", "Ertaga dam olish kuni") == 2
    assert await service.get_user_notifications(producer) == []


async def test_push_to_telegram(session, distributor):
    bot = FakeBot()
    service = NotificationService(session, bot)

    await service.create(distributor.id, NotificationTypeEnum.ORDER_STATUS, "Sarlavha", "Matn")

    assert len(bot.sent) == 1
    chat_id, text = bot.sent[0]
    assert chat_id == distributor.telegram_id
    assert "Sarlavha" in text and "Matn" in text


async def test_push_failure_keeps_notification(session, distributor):
    service = NotificationService(session, FakeBot(fail=True))

    notification = await service.create(distributor.id, NotificationTypeEnum.SYSTEM, "T", "M")

    assert notification is not None
    assert len(await service.get_user_notifications(distributor)) == 1
