import hmac
import logging
from datetime import timedelta
from typing import List, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from paper_review.core.config import Settings
from paper_review.core.errors import AlreadyExists, InvalidCredentials, NotFound
from paper_review.core.security import create_access_token
from paper_review.db.repositories.moderator_repository import ModeratorRepository
from paper_review.domains.identity.entities import Moderator
from paper_review.domains.identity.schemas import ModeratorCreate

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


class IdentityService:
    """Сервис для входа администратора и модераторов и управления модераторами"""

    def __init__(self, session: AsyncSession, settings: Settings):
        self.session = session
        self.settings = settings
        self.moderator_repository = ModeratorRepository(session)

    def _issue_token(self, claims: dict) -> str:
        return create_access_token(
            data=claims,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.access_token_expire_minutes)
        )

    def authenticate_admin(self, username: str, password: str) -> str:
        """Вход администратора; возвращает токен"""
        expected = self.settings.admin_password
        if (
            not expected
            or username != ADMIN_USERNAME
            or not hmac.compare_digest(password.encode(), expected.encode())
        ):
            logger.warning("Rejected admin login")
            raise InvalidCredentials("Invalid credentials")

        logger.info("Admin logged in")
        return self._issue_token({"sub": ADMIN_USERNAME, "is_admin": True})

    async def authenticate_moderator(self, username: str, password: str) -> Tuple[str, Moderator]:
        """Вход модератора; возвращает токен и модератора"""
        moderator = await self.moderator_repository.get_by_username(username)

        if not moderator or not moderator.authenticate(password):
            logger.warning(f"Rejected login for moderator {username!r}")
            raise InvalidCredentials("Invalid username or password.")

        token = self._issue_token({"sub": str(moderator.id), "username": moderator.username})
        logger.info(f"Moderator {moderator.id} logged in")
        return token, moderator

    async def register_moderator(self, moderator_data: ModeratorCreate) -> Moderator:
        """Регистрация нового модератора"""
        if await self.moderator_repository.username_exists(moderator_data.username):
            raise AlreadyExists("Moderator already registered.")

        moderator = Moderator.create_moderator(
            username=moderator_data.username,
            password=moderator_data.password
        )
        moderator = await self.moderator_repository.create(moderator)
        logger.info(f"Moderator {moderator.id} registered as {moderator.username!r}")
        return moderator

    async def get_moderator(self, moderator_id: uuid.UUID) -> Moderator:
        """Получение модератора по id"""
        moderator = await self.moderator_repository.get_by_id(moderator_id)
        if not moderator:
            raise NotFound("Moderator not found.")
        return moderator

    async def list_moderators(self) -> List[Moderator]:
        """Получение списка модераторов"""
        return await self.moderator_repository.get_all()

    async def delete_moderator(self, moderator_id: uuid.UUID) -> None:
        """Удаление модератора; его работы удаляются вызывающим заранее"""
        if not await self.moderator_repository.delete(moderator_id):
            raise NotFound("Moderator not found.")
        logger.info(f"Moderator {moderator_id} deleted")
