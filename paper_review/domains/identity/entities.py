import uuid
from datetime import datetime
from typing import Optional

from paper_review.core.clock import utcnow
from paper_review.core.security import get_password_hash, verify_password


class Moderator:
    """Учётная запись модератора"""

    def __init__(
        self,
        id: uuid.UUID,
        username: str,
        password_hash: str,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    def authenticate(self, password: str) -> bool:
        """Проверка пароля модератора"""
        return verify_password(password, self.password_hash)

    @classmethod
    def create_moderator(cls, username: str, password: str) -> "Moderator":
        """Создание нового модератора с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            username=username,
            password_hash=get_password_hash(password)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Moderator):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        # хеш пароля не попадает в repr и логи
        return f"Moderator(id={self.id}, username={self.username})"
