"""Жизненный цикл вложений работы.

Список вложений работы и содержимое в хранилище файлов меняются вместе:

* добавление сначала загружает файлы, затем записывает документ работы;
  если загрузка обрывается посреди пакета, уже загруженные этим вызовом
  файлы удаляются, а документ не меняется;
* удаление одного вложения сначала удаляет файл из хранилища; ошибка
  хранилища прерывает операцию и метаданные остаются прежними;
* каскадное удаление работы удаляет все файлы, собирая ошибки в
  ``CascadeResult`` вместо того чтобы прерываться.
"""
import logging
from dataclasses import dataclass, field
from typing import List
import uuid

from paper_review.core.errors import UpstreamFailure
from paper_review.db.repositories.paper_repository import PaperRepository
from paper_review.domains.papers.entities import Attachment, Paper
from paper_review.storage.base import BlobStore, UploadedFile

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    """Итог каскадного удаления файлов работы"""
    paper_id: uuid.UUID
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class AttachmentManager:
    """Согласует вложения работы с хранилищем файлов"""

    def __init__(self, blob_store: BlobStore, paper_repository: PaperRepository):
        self.blob_store = blob_store
        self.paper_repository = paper_repository

    async def store_files(self, files: List[UploadedFile]) -> List[Attachment]:
        """Загрузка файлов в порядке поступления"""
        attachments: List[Attachment] = []
        try:
            for file in files:
                blob = await self.blob_store.put(file)
                attachments.append(
                    Attachment.create_attachment(
                        locator=blob.locator,
                        original_name=file.filename,
                        remote_id=blob.remote_id
                    )
                )
        except UpstreamFailure:
            await self._discard(attachments)
            raise
        return attachments

    async def add_attachments(self, paper: Paper, files: List[UploadedFile]) -> Paper:
        """Добавление файлов в конец списка вложений работы"""
        if not files:
            return paper

        attachments = await self.store_files(files)
        paper.add_attachments(attachments)
        try:
            return await self.paper_repository.update(paper)
        except Exception:
            await self._discard(attachments)
            raise

    async def remove_attachment(self, paper: Paper, attachment_id: str) -> Paper:
        """Удаление одного вложения: сначала файл, затем метаданные"""
        attachment = paper.get_attachment(attachment_id)

        try:
            await self.blob_store.delete(attachment.locator, attachment.remote_id)
        except UpstreamFailure:
            logger.exception(f"Failed to delete blob of attachment {attachment.id} on paper {paper.id}")
            raise

        paper.remove_attachment(attachment.id)
        return await self.paper_repository.update(paper)

    async def delete_paper_cascade(self, paper: Paper) -> CascadeResult:
        """Удаление всех файлов работы; саму запись удаляет вызывающий"""
        result = CascadeResult(paper_id=paper.id)
        for attachment in paper.attachments:
            try:
                await self.blob_store.delete(attachment.locator, attachment.remote_id)
            except UpstreamFailure as e:
                logger.warning(
                    f"Could not delete blob of attachment {attachment.id} on paper {paper.id}: {e}"
                )
                result.failed.append(attachment.id)
            else:
                result.deleted.append(attachment.id)
        return result

    async def _discard(self, attachments: List[Attachment]) -> None:
        """Удаление файлов, загруженных незавершённым вызовом"""
        for attachment in attachments:
            try:
                await self.blob_store.delete(attachment.locator, attachment.remote_id)
            except UpstreamFailure:
                logger.warning(f"Orphaned blob {attachment.locator} after failed upload batch")
