import time
from typing import Dict

import jwt

from meatline.config import config
from meatline.exceptions import AuthenticationError
from meatline.models import User

ALGORITHM = "HS256"


def _now() -> int:
    return int(time.time())


def create_token(user: User) -> str:
    """Bearer-токен: sub - id пользователя (строкой), role, exp"""
    payload = {
        "sub": str(user.id),
        "telegram_id": str(user.telegram_id),
        "role": user.role.value,
        "iat": _now(),
        "exp": _now() + config.JWT_TTL_MINUTES * 60,
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> Dict:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired", "token_expired")
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid token", "invalid_token")
