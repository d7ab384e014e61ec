from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
import uuid
from datetime import datetime

from paper_review.domains.papers.entities import NOTE_MAX_LENGTH, TITLE_MAX_LENGTH


class PaperCreate(BaseModel):
    """Схема для создания работы"""
    moderator_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    note: str = Field(..., min_length=1, max_length=NOTE_MAX_LENGTH)

    @field_validator('title', 'note')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v


class PaperUpdate(BaseModel):
    """Схема для обновления работы"""
    note: Optional[str] = Field(None, max_length=NOTE_MAX_LENGTH)

    @field_validator('note')
    @classmethod
    def empty_note_means_unchanged(cls, v):
        # пустая заметка в форме означает "не менять"
        if v is not None and not v.strip():
            return None
        return v


class AttachmentResponse(BaseModel):
    """Схема для ответа с данными вложения"""
    id: str
    locator: str
    remote_id: Optional[str] = None
    original_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaperResponse(BaseModel):
    """Схема для ответа с данными работы"""
    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    note: str
    attachments: List[AttachmentResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaperDeleteResponse(BaseModel):
    """Схема для ответа об удалении работы"""
    message: str
    failed_attachments: List[str] = []
