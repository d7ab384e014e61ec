from paper_review.domains.papers.entities import Attachment, Paper
from paper_review.domains.papers.schemas import (
    PaperCreate, PaperUpdate, AttachmentResponse, PaperResponse, PaperDeleteResponse
)
from paper_review.domains.papers.attachments import AttachmentManager, CascadeResult
from paper_review.domains.papers.services import PaperService

__all__ = [
    "Attachment", "Paper",
    "PaperCreate", "PaperUpdate", "AttachmentResponse", "PaperResponse", "PaperDeleteResponse",
    "AttachmentManager", "CascadeResult",
    "PaperService"
]
