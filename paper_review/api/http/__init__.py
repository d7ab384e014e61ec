from paper_review.api.http.health import router as health_router
from paper_review.api.http.auth import router as auth_router
from paper_review.api.http.moderators import router as moderators_router
from paper_review.api.http.papers import router as papers_router

__all__ = [
    "health_router",
    "auth_router",
    "moderators_router",
    "papers_router"
]
