from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_PASSWORD = 72


def _bcrypt_secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    try:
        return pwd_context.verify(_bcrypt_secret(plain_password), hashed_password)
    except ValueError:
        # хеш в базе повреждён или в неизвестном формате
        return False


def get_password_hash(password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(_bcrypt_secret(password))


def create_access_token(
    data: Dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Создание JWT токена доступа"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)  # По умолчанию 15 минут

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """Проверка JWT токена и извлечение данных.

    Бросает ``JWTError`` при неверной подписи или истёкшем сроке.
    """
    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "JWTError",
    "pwd_context",
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
]
