from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paper_review.api.deps import get_settings
from paper_review.core.config import Settings
from paper_review.core.db import get_db
from paper_review.domains.identity.schemas import LoginRequest, ModeratorToken, Token
from paper_review.domains.identity.services import IdentityService

router = APIRouter(tags=["authentication"])


@router.post("/admin/login", response_model=Token)
async def admin_login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Вход администратора"""
    identity_service = IdentityService(db, settings)
    token = identity_service.authenticate_admin(login_data.username, login_data.password)
    return Token(token=token)


@router.post("/moderators/login", response_model=ModeratorToken)
async def moderator_login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Вход модератора"""
    identity_service = IdentityService(db, settings)
    token, moderator = await identity_service.authenticate_moderator(
        login_data.username, login_data.password
    )
    return ModeratorToken(token=token, username=moderator.username)
