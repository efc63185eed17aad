# -*- coding: utf-8 -*-
from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    # Общие
    "welcome": {
        "uz": "Assalomu alaykum, {name}! 👋\n\n🥩 Buyurtmalar botiga xush kelibsiz!\n\n"
              "Bu bot orqali siz:\n✅ Buyurtma berishingiz\n✅ Buyurtmalaringizni kuzatishingiz\n"
              "✅ Xabarnomalar olishingiz mumkin",
        "ru": "Здравствуйте, {name}! 👋\n\n🥩 Добро пожаловать в бот заказов!\n\n"
              "Здесь вы можете:\n✅ Оформлять заказы\n✅ Следить за заказами\n✅ Получать уведомления",
    },
    "registration_pending": {
        "uz": "✋ Sizning hisobingiz hali tasdiqlanmagan.\n\n"
              "Admin tomonidan tasdiqlanganidan keyin botdan foydalanishingiz mumkin bo'ladi.",
        "ru": "✋ Ваш аккаунт еще не подтвержден.\n\n"
              "Бот станет доступен после подтверждения администратором.",
    },
    "help": {
        "uz": "❓ Yordam\n\n⏰ Buyurtma vaqti: 04:00 - 16:00\n\n📝 Bot buyruqlari:\n"
              "/start - Botni qayta boshlash\n/menu - Asosiy menyu\n/help - Yordam",
        "ru": "❓ Помощь\n\n⏰ Время приема заказов: 04:00 - 16:00\n\n📝 Команды:\n"
              "/start - Перезапуск\n/menu - Главное меню\n/help - Помощь",
    },
    "menu_title": {
        "uz": "Amalni tanlang:",
        "ru": "Выберите действие:",
    },
    "unauthorized": {
        "uz": "🚫 Sizda bu amalni bajarish uchun ruxsat yo'q.",
        "ru": "🚫 У вас нет прав на это действие.",
    },
    "error": {
        "uz": "❌ Xatolik yuz berdi. Iltimos, qayta urinib ko'ring.",
        "ru": "❌ Произошла ошибка. Попробуйте еще раз.",
    },
    "back": {
        "uz": "🔙 Orqaga",
        "ru": "🔙 Назад",
    },
    "cancel": {
        "uz": "❌ Bekor qilish",
        "ru": "❌ Отмена",
    },

    # Меню
    "menu_new_order": {"uz": "📦 Yangi buyurtma", "ru": "📦 Новый заказ"},
    "menu_my_orders": {"uz": "📋 Mening buyurtmalarim", "ru": "📋 Мои заказы"},
    "menu_notifications": {"uz": "🔔 Xabarnomalar", "ru": "🔔 Уведомления"},
    "menu_profile": {"uz": "👤 Profil", "ru": "👤 Профиль"},
    "menu_help": {"uz": "❓ Yordam", "ru": "❓ Помощь"},
    "menu_orders": {"uz": "📊 Buyurtmalar", "ru": "📊 Заказы"},
    "menu_reports": {"uz": "📈 Hisobotlar", "ru": "📈 Отчеты"},
    "menu_users": {"uz": "👥 Foydalanuvchilar", "ru": "👥 Пользователи"},

    # Профиль
    "profile": {
        "uz": "👤 <b>Profil</b>\n\nIsm: {name}\nTelefon: {phone}\nKompaniya: {company}\nRol: {role}",
        "ru": "👤 <b>Профиль</b>\n\nИмя: {name}\nТелефон: {phone}\nКомпания: {company}\nРоль: {role}",
    },

    # Новый заказ
    "no_products": {
        "uz": "❌ Hozirda mavjud mahsulotlar yo'q.",
        "ru": "❌ Сейчас нет доступных продуктов.",
    },
    "new_order_title": {
        "uz": "📦 Yangi buyurtma\n\nMahsulot tanlang:",
        "ru": "📦 Новый заказ\n\nВыберите продукт:",
    },
    "confirm_order_button": {
        "uz": "✅ Buyurtmani tasdiqlash",
        "ru": "✅ Подтвердить заказ",
    },
    "session_not_found": {
        "uz": "❌ Sessiya topilmadi. Qaytadan boshlang.",
        "ru": "❌ Сессия не найдена. Начните заново.",
    },
    "product_selected": {
        "uz": "📦 Mahsulot tanlandi: {name}\n\n🔢 Miqdorni kiriting ({unit}):",
        "ru": "📦 Выбран продукт: {name}\n\n🔢 Введите количество ({unit}):",
    },
    "invalid_quantity": {
        "uz": "❌ Noto'g'ri miqdor. Musbat son kiriting:",
        "ru": "❌ Неверное количество. Введите положительное число:",
    },
    "selected_items": {
        "uz": "📋 Tanlangan mahsulotlar:\n\n{items}\n\nYana mahsulot qo'shishingiz yoki buyurtmani tasdiqlashingiz mumkin:",
        "ru": "📋 Выбранные продукты:\n\n{items}\n\nДобавьте еще продукт или подтвердите заказ:",
    },
    "empty_order": {
        "uz": "❌ Buyurtmada mahsulotlar yo'q.",
        "ru": "❌ В заказе нет продуктов.",
    },
    "ask_order_date": {
        "uz": "📅 Buyurtma sanasini kiriting (format: YYYY-MM-DD):\n\nMasalan: {example}",
        "ru": "📅 Введите дату заказа (формат: YYYY-MM-DD):\n\nНапример: {example}",
    },
    "ask_delivery_date": {
        "uz": "📅 Yetkazib berish sanasini kiriting (format: YYYY-MM-DD):",
        "ru": "📅 Введите дату доставки (формат: YYYY-MM-DD):",
    },
    "invalid_date": {
        "uz": "❌ Noto'g'ri sana formati. Qayta kiriting (YYYY-MM-DD):",
        "ru": "❌ Неверный формат даты. Введите еще раз (YYYY-MM-DD):",
    },
    "order_created": {
        "uz": "✅ Buyurtma muvaffaqiyatli yaratildi!\n\n📋 Buyurtma raqami: {number}\n"
              "📅 Buyurtma sanasi: {order_date}\n📅 Yetkazish sanasi: {delivery_date}\n"
              "📊 Status: {status}\n\n📦 Mahsulotlar:\n{items}",
        "ru": "✅ Заказ успешно создан!\n\n📋 Номер заказа: {number}\n"
              "📅 Дата заказа: {order_date}\n📅 Дата доставки: {delivery_date}\n"
              "📊 Статус: {status}\n\n📦 Продукты:\n{items}",
    },
    "order_cancelled": {
        "uz": "❌ Buyurtma bekor qilindi.",
        "ru": "❌ Заказ отменен.",
    },

    # Заказы
    "no_orders": {
        "uz": "📋 Sizda hali buyurtmalar yo'q.",
        "ru": "📋 У вас пока нет заказов.",
    },
    "my_orders_title": {
        "uz": "📋 Mening buyurtmalarim:",
        "ru": "📋 Мои заказы:",
    },
    "orders_empty": {
        "uz": "📋 Buyurtmalar yo'q.",
        "ru": "📋 Заказов нет.",
    },
    "orders_title": {
        "uz": "📊 Buyurtmalar ({count} ta):",
        "ru": "📊 Заказы ({count}):",
    },
    "filter_today": {"uz": "📅 Bugungi", "ru": "📅 Сегодня"},
    "filter_pending": {"uz": "⏳ Kutilmoqda", "ru": "⏳ Ожидают"},
    "filter_all": {"uz": "🔄 Barchasi", "ru": "🔄 Все"},
    "order_not_found": {
        "uz": "❌ Buyurtma topilmadi.",
        "ru": "❌ Заказ не найден.",
    },
    "status_changed": {
        "uz": "✅ Buyurtma {number} holati {status}ga o'zgartirildi.",
        "ru": "✅ Статус заказа {number} изменен на {status}.",
    },
    "change_quantity_button": {
        "uz": "✏️ Miqdorni o'zgartirish",
        "ru": "✏️ Изменить количество",
    },

    # Корректировка
    "choose_item": {
        "uz": "Qaysi mahsulot miqdorini o'zgartirasiz?",
        "ru": "Количество какого продукта изменить?",
    },
    "ask_new_quantity": {
        "uz": "🔢 {name}: hozirgi miqdor {quantity}.\n\nYangi miqdorni kiriting (0 - o'chirish):",
        "ru": "🔢 {name}: текущее количество {quantity}.\n\nВведите новое количество (0 - удалить):",
    },
    "confirm_remove": {
        "uz": "⚠️ {name} buyurtmadan olib tashlansinmi?",
        "ru": "⚠️ Удалить {name} из заказа?",
    },
    "yes": {"uz": "✅ Ha", "ru": "✅ Да"},
    "no": {"uz": "❌ Yo'q", "ru": "❌ Нет"},
    "ask_reason": {
        "uz": "📝 O'zgartirish sababini kiriting:",
        "ru": "📝 Укажите причину изменения:",
    },
    "quantity_changed": {
        "uz": "✅ {name} miqdori {old} dan {new} ga o'zgartirildi.",
        "ru": "✅ Количество {name} изменено с {old} на {new}.",
    },
    "item_removed": {
        "uz": "✅ {name} buyurtmadan olib tashlandi.",
        "ru": "✅ {name} удален из заказа.",
    },
    "last_item": {
        "uz": "❌ Buyurtmadagi yagona mahsulotni o'chirib bo'lmaydi.",
        "ru": "❌ Нельзя удалить единственный продукт заказа.",
    },

    # Уведомления
    "no_notifications": {
        "uz": "🔔 Sizda xabarnomalar yo'q.",
        "ru": "🔔 У вас нет уведомлений.",
    },
    "notifications_title": {
        "uz": "🔔 Xabarnomalar (o'qilmagan: {unread}):",
        "ru": "🔔 Уведомления (непрочитанных: {unread}):",
    },
    "mark_all_read": {
        "uz": "✅ Barchasini o'qilgan deb belgilash",
        "ru": "✅ Отметить все прочитанными",
    },
    "all_marked_read": {
        "uz": "✅ {count} ta xabarnoma o'qilgan deb belgilandi.",
        "ru": "✅ Отмечено прочитанными: {count}.",
    },

    # Отчеты и пользователи
    "no_orders_today": {
        "uz": "📊 Bugun buyurtmalar yo'q.",
        "ru": "📊 Сегодня заказов нет.",
    },
    "daily_report": {
        "uz": "📊 Kunlik hisobot ({date})\n\n📋 Jami buyurtmalar: {total} ta\n\n📦 Mahsulotlar:\n\n{rows}",
        "ru": "📊 Дневной отчет ({date})\n\n📋 Всего заказов: {total}\n\n📦 Продукты:\n\n{rows}",
    },
    "report_row": {
        "uz": "{index}. {name} ({code})\n   📊 Jami: {quantity} {unit}\n   📋 Buyurtmalar: {count} ta",
        "ru": "{index}. {name} ({code})\n   📊 Всего: {quantity} {unit}\n   📋 Позиций: {count}",
    },
    "no_pending_users": {
        "uz": "👥 Tasdiqlanishi kutilayotgan foydalanuvchilar yo'q.",
        "ru": "👥 Нет пользователей, ожидающих подтверждения.",
    },
    "pending_user": {
        "uz": "👤 {name}\n📞 {phone}\n🆔 {telegram_id}",
        "ru": "👤 {name}\n📞 {phone}\n🆔 {telegram_id}",
    },
    "approve": {"uz": "✅ Tasdiqlash", "ru": "✅ Подтвердить"},
    "reject": {"uz": "❌ Rad etish", "ru": "❌ Отклонить"},
    "user_approved": {
        "uz": "✅ {name} tasdiqlandi.",
        "ru": "✅ {name} подтвержден.",
    },
    "user_rejected": {
        "uz": "❌ {name} rad etildi.",
        "ru": "❌ {name} отклонен.",
    },
    "account_approved": {
        "uz": "🎉 Hisobingiz tasdiqlandi! /menu buyrug'i bilan boshlang.",
        "ru": "🎉 Ваш аккаунт подтвержден! Начните с команды /menu.",
    },
}


def t(lang: str, key: str, **kwargs) -> str:
    """
    Безопасный доступ к переводу.
    - lang: 'uz' | 'ru' (иначе fallback на 'uz')
    - key: ключ из TRANSLATIONS
    - kwargs: подстановки в шаблон (format)
    """
    lang = lang if lang in ("uz", "ru") else "uz"
    entry = TRANSLATIONS.get(key, {})
    template = entry.get(lang) or entry.get("uz") or key
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError):
        # если не хватает плейсхолдеров, вернём как есть
        return template


def all_translations(key: str) -> set:
    """Текст кнопки на всех языках, для фильтров F.text.in_(...)"""
    return set(TRANSLATIONS.get(key, {}).values())
