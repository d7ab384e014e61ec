from sqlalchemy import Column, String

from paper_review.db.base import BaseModel


class Moderator(BaseModel):
    __tablename__ = "moderators"

    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
