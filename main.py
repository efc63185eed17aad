# main.py - запуск бота в режиме polling
import sys
import asyncio
import logging

# SelectorEventLoop нужен asyncpg под Windows
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from meatline.config import config
from meatline.bot import create_bot, create_dispatcher
from meatline.database.database import init_db, close_db

# Настройка логирования
logging.basicConfig(level=config.LOG_LEVEL)
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


async def main():
    """Главная функция приложения"""
    bot = None
    try:
        config.validate()
        await init_db()

        if "--seed" in sys.argv:
            from meatline.utils.seed import load_seed_data
            await load_seed_data()
            return

        bot = create_bot()
        dp = create_dispatcher()

        # Webhook мог остаться от запуска через API
        await bot.delete_webhook(drop_pending_updates=False)
        logger.info("🥩 Meatline bot запущен (polling)")
        await dp.start_polling(bot)
    finally:
        if bot:
            await bot.session.close()
        await close_db()
        logger.info("Ресурсы закрыты")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Завершение...")
