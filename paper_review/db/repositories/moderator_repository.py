from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
import uuid

from paper_review.core.errors import AlreadyExists
from paper_review.db.models.moderator import Moderator as ModeratorModel

if TYPE_CHECKING:
    from paper_review.domains.identity.entities import Moderator


class ModeratorRepository:
    """Репозиторий для работы с модераторами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, moderator: "Moderator") -> "Moderator":
        """Создание нового модератора"""
        db_moderator = ModeratorModel(
            id=moderator.id,
            username=moderator.username,
            password_hash=moderator.password_hash,
            created_at=moderator.created_at,
            updated_at=moderator.updated_at
        )

        self.session.add(db_moderator)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise AlreadyExists("Moderator already registered.")
        await self.session.refresh(db_moderator)
        return self._to_domain(db_moderator)

    async def get_by_id(self, moderator_id: uuid.UUID) -> Optional["Moderator"]:
        """Получение модератора по id"""
        result = await self.session.execute(
            select(ModeratorModel).where(ModeratorModel.id == moderator_id)
        )
        db_moderator = result.scalar_one_or_none()
        return self._to_domain(db_moderator) if db_moderator else None

    async def get_by_username(self, username: str) -> Optional["Moderator"]:
        """Получение модератора по username"""
        result = await self.session.execute(
            select(ModeratorModel).where(ModeratorModel.username == username)
        )
        db_moderator = result.scalar_one_or_none()
        return self._to_domain(db_moderator) if db_moderator else None

    async def username_exists(self, username: str) -> bool:
        """Проверка существования username"""
        result = await self.session.execute(
            select(ModeratorModel.id).where(ModeratorModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def get_all(self) -> List["Moderator"]:
        """Получение списка модераторов"""
        result = await self.session.execute(
            select(ModeratorModel).order_by(ModeratorModel.created_at)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def delete(self, moderator_id: uuid.UUID) -> bool:
        """Удаление модератора"""
        stmt = delete(ModeratorModel).where(ModeratorModel.id == moderator_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_moderator: ModeratorModel) -> "Moderator":
        """Преобразование модели БД в доменную сущность"""
        from paper_review.domains.identity.entities import Moderator

        return Moderator(
            id=db_moderator.id,
            username=db_moderator.username,
            password_hash=db_moderator.password_hash,
            created_at=db_moderator.created_at,
            updated_at=db_moderator.updated_at
        )
