from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
import uuid

from paper_review.core.errors import NotFound
from paper_review.db.models.paper import Paper as PaperModel

if TYPE_CHECKING:
    from paper_review.domains.papers.entities import Paper


class PaperRepository:
    """Репозиторий для работы с работами.

    Обновление всегда записывает документ целиком, включая список вложений.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, paper: "Paper") -> "Paper":
        """Создание новой работы"""
        db_paper = PaperModel(
            id=paper.id,
            owner_id=paper.owner_id,
            title=paper.title,
            note=paper.note,
            attachments=[a.to_dict() for a in paper.attachments],
            created_at=paper.created_at,
            updated_at=paper.updated_at
        )

        self.session.add(db_paper)
        await self.session.commit()
        await self.session.refresh(db_paper)
        return self._to_domain(db_paper)

    async def get_by_id(self, paper_id: uuid.UUID) -> Optional["Paper"]:
        """Получение работы по id"""
        result = await self.session.execute(
            select(PaperModel)
            .where(PaperModel.id == paper_id)
            .execution_options(populate_existing=True)
        )
        db_paper = result.scalar_one_or_none()
        return self._to_domain(db_paper) if db_paper else None

    async def get_by_owner(self, owner_id: uuid.UUID) -> List["Paper"]:
        """Получение работ модератора"""
        result = await self.session.execute(
            select(PaperModel)
            .where(PaperModel.owner_id == owner_id)
            .order_by(PaperModel.created_at)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(p) for p in result.scalars().all()]

    async def update(self, paper: "Paper") -> "Paper":
        """Обновление работы"""
        stmt = (
            update(PaperModel)
            .where(PaperModel.id == paper.id)
            .values(
                note=paper.note,
                attachments=[a.to_dict() for a in paper.attachments],
                updated_at=paper.updated_at
            )
        )

        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            # работу удалили между чтением и записью
            raise NotFound("Paper not found.")

        return await self.get_by_id(paper.id)

    async def delete(self, paper_id: uuid.UUID) -> bool:
        """Удаление работы"""
        stmt = delete(PaperModel).where(PaperModel.id == paper_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete_by_owner(self, owner_id: uuid.UUID) -> int:
        """Удаление всех работ модератора"""
        stmt = delete(PaperModel).where(PaperModel.owner_id == owner_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    def _to_domain(self, db_paper: PaperModel) -> "Paper":
        """Преобразование модели БД в доменную сущность"""
        from paper_review.domains.papers.entities import Attachment, Paper

        return Paper(
            id=db_paper.id,
            owner_id=db_paper.owner_id,
            title=db_paper.title,
            note=db_paper.note,
            attachments=[Attachment.from_dict(a) for a in db_paper.attachments or []],
            created_at=db_paper.created_at,
            updated_at=db_paper.updated_at
        )
