"""Начальные данные: пользователи по ролям и ассортимент колбасного цеха"""
import asyncio
import logging

from meatline.database.uow import get_uow
from meatline.models import User, Product, RoleEnum, ProductUnitEnum

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"telegram_id": 111111111, "role": RoleEnum.ADMIN, "name": "Admin User",
     "phone": "+998901234567"},
    {"telegram_id": 222222222, "role": RoleEnum.PRODUCER, "name": "Ishlab chiqaruvchi",
     "phone": "+998901234568"},
    {"telegram_id": 333333333, "role": RoleEnum.DISTRIBUTOR, "name": "Distribyutor Aziz",
     "phone": "+998901234569", "company_name": "Aziz Trade"},
    {"telegram_id": 444444444, "role": RoleEnum.DISTRIBUTOR, "name": "Distribyutor Bobur",
     "phone": "+998901234570", "company_name": "Bobur Foods"},
]


def _recipe(meat_name: str, meat: int, fat: int, spices: int) -> dict:
    return {
        "ingredients": [
            {"name": meat_name, "amount": meat, "unit": "kg"},
            {"name": "Yog'", "amount": fat, "unit": "kg"},
            {"name": "Tuz", "amount": 2, "unit": "kg"},
            {"name": "Ziravorlar", "amount": spices, "unit": "kg"},
        ],
        "yield": 100,
    }


SEED_PRODUCTS = [
    {"code": "KOLBASA-001", "name": "Doktorskaya kolbasa",
     "base_recipe": _recipe("Go'sht", 70, 20, 1),
     "production_parameters": {"cookingTime": 120, "temperature": 75, "batchSize": 100}},
    {"code": "KOLBASA-002", "name": "Sardelka",
     "base_recipe": _recipe("Go'sht", 65, 25, 1),
     "production_parameters": {"cookingTime": 90, "temperature": 70, "batchSize": 100}},
    {"code": "KOLBASA-003", "name": "Sosiska",
     "base_recipe": _recipe("Go'sht", 60, 30, 1),
     "production_parameters": {"cookingTime": 60, "temperature": 65, "batchSize": 100}},
    {"code": "KOLBASA-004", "name": "Qazi",
     "base_recipe": _recipe("Ot go'shti", 80, 15, 2),
     "production_parameters": {"cookingTime": 180, "temperature": 80, "batchSize": 50}},
    {"code": "KOLBASA-005", "name": "Salami",
     "base_recipe": _recipe("Go'sht", 75, 20, 2),
     "production_parameters": {"cookingTime": 150, "temperature": 85, "batchSize": 80}},
]


async def load_seed_data() -> None:
    """Создать недостающие записи; существующие не трогаются"""
    async with get_uow() as uow:
        for data in SEED_USERS:
            if not await uow.users.get_by_telegram_id(data["telegram_id"]):
                await uow.users.create(User(is_active=True, **data))
        for data in SEED_PRODUCTS:
            if not await uow.products.get_by_code(data["code"]):
                await uow.products.create(Product(unit=ProductUnitEnum.KG, is_active=True, **data))
    logger.info("Seed data loaded: %s users, %s products", len(SEED_USERS), len(SEED_PRODUCTS))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(load_seed_data())
