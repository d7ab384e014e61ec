from paper_review.db.repositories.moderator_repository import ModeratorRepository
from paper_review.db.repositories.paper_repository import PaperRepository

__all__ = [
    "ModeratorRepository",
    "PaperRepository"
]
