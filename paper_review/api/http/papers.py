from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from paper_review.api.deps import get_blob_store
from paper_review.core.auth import CallerContext, get_admin, get_caller, require_admin_or_self
from paper_review.core.db import get_db
from paper_review.core.errors import ValidationError
from paper_review.domains.identity.schemas import MessageResponse
from paper_review.domains.papers.schemas import (
    PaperCreate, PaperDeleteResponse, PaperResponse, PaperUpdate
)
from paper_review.domains.papers.services import PaperService
from paper_review.storage.base import BlobStore, UploadedFile

router = APIRouter(prefix="/papers", tags=["papers"])


async def read_uploads(files: Optional[List[UploadFile]]) -> List[UploadedFile]:
    """Чтение загруженных файлов в порядке поступления"""
    uploaded = []
    for file in files or []:
        uploaded.append(
            UploadedFile(
                filename=file.filename or "file",
                content=await file.read(),
                content_type=file.content_type
            )
        )
    return uploaded


def validation_message(error: SchemaValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


@router.post("", response_model=PaperResponse)
async def create_paper(
    moderator_id: str = Form(...),
    title: str = Form(...),
    note: str = Form(...),
    files: Optional[List[UploadFile]] = File(None),
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Создание работы с файлами"""
    try:
        paper_data = PaperCreate(moderator_id=moderator_id, title=title, note=note)
    except SchemaValidationError as e:
        raise ValidationError(validation_message(e))

    paper_service = PaperService(db, blob_store)
    paper = await paper_service.create_paper(paper_data, await read_uploads(files))
    return PaperResponse.model_validate(paper)


@router.put("/{paper_id}", response_model=PaperResponse)
async def update_paper(
    paper_id: uuid.UUID,
    note: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Обновление заметки и добавление файлов"""
    try:
        update_data = PaperUpdate(note=note)
    except SchemaValidationError as e:
        raise ValidationError(validation_message(e))

    paper_service = PaperService(db, blob_store)
    paper = await paper_service.update_paper(paper_id, update_data, await read_uploads(files))
    return PaperResponse.model_validate(paper)


@router.delete("/{paper_id}/files/{file_id}", response_model=MessageResponse)
async def delete_paper_file(
    paper_id: uuid.UUID,
    file_id: str,
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Удаление одного файла работы"""
    paper_service = PaperService(db, blob_store)
    await paper_service.remove_attachment(paper_id, file_id)
    return MessageResponse(message="File deleted successfully")


@router.get("/moderator/{moderator_id}", response_model=List[PaperResponse])
async def list_moderator_papers(
    moderator_id: uuid.UUID,
    caller: CallerContext = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Работы модератора: доступно администратору и самому модератору"""
    require_admin_or_self(caller, moderator_id)

    paper_service = PaperService(db, blob_store)
    papers = await paper_service.list_by_owner(moderator_id)
    return [PaperResponse.model_validate(p) for p in papers]


@router.delete("/{paper_id}", response_model=PaperDeleteResponse)
async def delete_paper(
    paper_id: uuid.UUID,
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Удаление работы вместе с файлами"""
    paper_service = PaperService(db, blob_store)
    result = await paper_service.delete_paper(paper_id)
    return PaperDeleteResponse(
        message="Paper deleted successfully",
        failed_attachments=result.failed
    )
