from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List
import uuid


class LoginRequest(BaseModel):
    """Схема для входа администратора или модератора"""
    username: str
    password: str


class ModeratorCreate(BaseModel):
    """Схема для создания модератора"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Username cannot be empty')
        return v


class ModeratorCreated(BaseModel):
    username: str


class ModeratorResponse(BaseModel):
    """Схема для ответа с данными модератора (без хеша пароля)"""
    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Схема для JWT токена"""
    token: str


class ModeratorToken(Token):
    username: str


class MessageResponse(BaseModel):
    message: str


class ModeratorDeleteResponse(MessageResponse):
    """Схема для ответа об удалении модератора"""
    failed_attachments: List[str] = []
