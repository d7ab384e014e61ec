import logging
from typing import List
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from paper_review.core.errors import NotFound
from paper_review.db.repositories.moderator_repository import ModeratorRepository
from paper_review.db.repositories.paper_repository import PaperRepository
from paper_review.domains.papers.attachments import AttachmentManager, CascadeResult
from paper_review.domains.papers.entities import Paper
from paper_review.domains.papers.schemas import PaperCreate, PaperUpdate
from paper_review.storage.base import BlobStore, UploadedFile

logger = logging.getLogger(__name__)


class PaperService:
    """Сервис для работы с работами модераторов"""

    def __init__(self, session: AsyncSession, blob_store: BlobStore):
        self.session = session
        self.paper_repository = PaperRepository(session)
        self.moderator_repository = ModeratorRepository(session)
        self.attachments = AttachmentManager(blob_store, self.paper_repository)

    async def get_paper(self, paper_id: uuid.UUID) -> Paper:
        """Получение работы по id"""
        paper = await self.paper_repository.get_by_id(paper_id)
        if not paper:
            raise NotFound("Paper not found.")
        return paper

    async def create_paper(self, paper_data: PaperCreate, files: List[UploadedFile]) -> Paper:
        """Создание работы с начальными вложениями"""
        owner = await self.moderator_repository.get_by_id(paper_data.moderator_id)
        if not owner:
            raise NotFound("Moderator not found.")

        attachments = await self.attachments.store_files(files)
        paper = Paper.create_paper(
            owner_id=owner.id,
            title=paper_data.title,
            note=paper_data.note,
            attachments=attachments
        )
        try:
            paper = await self.paper_repository.create(paper)
        except Exception:
            await self.attachments.delete_paper_cascade(paper)
            raise

        logger.info(f"Paper {paper.id} created for moderator {owner.id} with {len(attachments)} files")
        return paper

    async def update_paper(
        self,
        paper_id: uuid.UUID,
        update_data: PaperUpdate,
        files: List[UploadedFile]
    ) -> Paper:
        """Обновление заметки и/или добавление файлов"""
        paper = await self.get_paper(paper_id)

        if update_data.note is not None:
            paper.update_note(update_data.note)

        if files:
            return await self.attachments.add_attachments(paper, files)

        # всегда записываем документ целиком, даже если изменилась только заметка
        paper.touch()
        return await self.paper_repository.update(paper)

    async def remove_attachment(self, paper_id: uuid.UUID, attachment_id: str) -> Paper:
        """Удаление одного вложения работы"""
        paper = await self.get_paper(paper_id)
        paper = await self.attachments.remove_attachment(paper, attachment_id)
        logger.info(f"Attachment {attachment_id} removed from paper {paper_id}")
        return paper

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Paper]:
        """Получение работ модератора"""
        return await self.paper_repository.get_by_owner(owner_id)

    async def delete_paper(self, paper_id: uuid.UUID) -> CascadeResult:
        """Удаление работы вместе с файлами"""
        paper = await self.get_paper(paper_id)
        result = await self.attachments.delete_paper_cascade(paper)
        await self.paper_repository.delete(paper.id)

        if result.failed:
            logger.warning(f"Paper {paper.id} deleted, blobs left behind: {result.failed}")
        else:
            logger.info(f"Paper {paper.id} deleted")
        return result

    async def delete_owner_papers(self, owner_id: uuid.UUID) -> List[CascadeResult]:
        """Удаление всех работ модератора вместе с файлами"""
        results = []
        for paper in await self.paper_repository.get_by_owner(owner_id):
            results.append(await self.attachments.delete_paper_cascade(paper))
        await self.paper_repository.delete_by_owner(owner_id)
        return results
