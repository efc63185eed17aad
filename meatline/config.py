# meatline/config.py
import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_environment():
    """Загрузка переменных окружения: .env.development -> .env -> система"""
    if os.path.exists('.env.development'):
        load_dotenv('.env.development')
        return ".env.development"
    if os.path.exists('.env'):
        load_dotenv('.env')
        return ".env"
    return "environment"


class Config:
    """Конфигурация приложения"""

    def __init__(self):
        self.SOURCE = load_environment()

        # Обязательные переменные
        self.BOT_TOKEN = self._get_required("BOT_TOKEN")
        self.DATABASE_URL = self._get_required("DATABASE_URL")

        # Опциональные с defaults
        self.ENV = os.getenv("ENV", "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.DEFAULT_LANG = os.getenv("DEFAULT_LANG", "uz")

        # REST API
        self.JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
        self.JWT_TTL_MINUTES = int(os.getenv("JWT_TTL_MINUTES", "10080"))
        self.API_HOST = os.getenv("API_HOST", "0.0.0.0")
        self.API_PORT = int(os.getenv("API_PORT", "8000"))

        # Webhook
        self.WEBHOOK_URL = os.getenv("WEBHOOK_URL")

    def _get_required(self, key: str) -> str:
        """Получить обязательную переменную"""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Переменная {key} обязательна")
        return value

    def is_development(self) -> bool:
        return self.ENV == "development"

    def validate(self):
        """Валидация конфигурации"""
        logger.info("Config loaded from %s (%s mode)", self.SOURCE, self.ENV)
        if not self.is_development() and self.JWT_SECRET == "change-me":
            logger.warning("JWT_SECRET не установлен, используется значение по умолчанию")


# Глобальный экземпляр
config = Config()
