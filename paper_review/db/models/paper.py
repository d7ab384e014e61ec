from sqlalchemy import Column, String, ForeignKey, UUID, JSON

from paper_review.db.base import BaseModel


class Paper(BaseModel):
    __tablename__ = "papers"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("moderators.id"), index=True, nullable=False)
    title = Column(String(100), nullable=False)
    note = Column(String(500), nullable=False)
    # Вложения хранятся внутри документа работы упорядоченным списком
    attachments = Column(JSON, nullable=False, default=list)
