from paper_review.domains.identity.entities import Moderator
from paper_review.domains.identity.schemas import (
    LoginRequest, ModeratorCreate, ModeratorCreated, ModeratorResponse,
    Token, ModeratorToken, MessageResponse, ModeratorDeleteResponse
)
from paper_review.domains.identity.services import IdentityService

__all__ = [
    "Moderator",
    "LoginRequest", "ModeratorCreate", "ModeratorCreated", "ModeratorResponse",
    "Token", "ModeratorToken", "MessageResponse", "ModeratorDeleteResponse",
    "IdentityService"
]
