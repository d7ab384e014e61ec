from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from paper_review.api.deps import get_blob_store, get_settings
from paper_review.core.auth import CallerContext, get_admin
from paper_review.core.config import Settings
from paper_review.core.db import get_db
from paper_review.domains.identity.schemas import (
    ModeratorCreate, ModeratorCreated, ModeratorDeleteResponse, ModeratorResponse
)
from paper_review.domains.identity.services import IdentityService
from paper_review.domains.papers.services import PaperService
from paper_review.storage.base import BlobStore

router = APIRouter(prefix="/moderators", tags=["moderators"])


@router.post("", response_model=ModeratorCreated)
async def register_moderator(
    moderator_data: ModeratorCreate,
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Регистрация модератора"""
    identity_service = IdentityService(db, settings)
    moderator = await identity_service.register_moderator(moderator_data)
    return ModeratorCreated(username=moderator.username)


@router.get("", response_model=List[ModeratorResponse])
async def list_moderators(
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Получение списка модераторов"""
    identity_service = IdentityService(db, settings)
    moderators = await identity_service.list_moderators()
    return [ModeratorResponse.model_validate(m) for m in moderators]


@router.delete("/{moderator_id}", response_model=ModeratorDeleteResponse)
async def delete_moderator(
    moderator_id: uuid.UUID,
    admin: CallerContext = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Удаление модератора вместе с его работами и их файлами"""
    identity_service = IdentityService(db, settings)
    paper_service = PaperService(db, blob_store)

    moderator = await identity_service.get_moderator(moderator_id)
    results = await paper_service.delete_owner_papers(moderator.id)
    await identity_service.delete_moderator(moderator.id)

    return ModeratorDeleteResponse(
        message="Moderator deleted successfully",
        failed_attachments=[attachment_id for result in results for attachment_id in result.failed]
    )
