import uuid

from sqlalchemy import Column, DateTime, UUID
from sqlalchemy.orm import declarative_base

from paper_review.core.clock import utcnow

# Базовый класс для моделей
Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
