"""
Meatline: заказы колбасного цеха
Стек: aiogram v3 + FastAPI + PostgreSQL
"""
__version__ = "1.0.0"
