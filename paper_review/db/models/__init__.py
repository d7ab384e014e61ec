from paper_review.db.models.moderator import Moderator
from paper_review.db.models.paper import Paper

__all__ = [
    "Moderator",
    "Paper"
]
