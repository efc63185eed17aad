# meatline/bot.py
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from meatline.config import config
from meatline.handlers import routers
from meatline.middleware.auth import AuthMiddleware
from meatline.utils.sessions import OrderSessionStore, order_sessions


def create_bot() -> Bot:
    return Bot(token=config.BOT_TOKEN)


def create_dispatcher(store: OrderSessionStore = order_sessions) -> Dispatcher:
    """Dispatcher с middleware и роутерами; store доступен хендлерам как order_store"""
    dp = Dispatcher(storage=MemoryStorage(), order_store=store)

    dp.message.middleware(AuthMiddleware())
    dp.callback_query.middleware(AuthMiddleware())

    for router in routers:
        dp.include_router(router)
    return dp
