import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from paper_review.core.clock import utcnow
from paper_review.core.errors import NotFound

TITLE_MAX_LENGTH = 100
NOTE_MAX_LENGTH = 500


class Attachment:
    """Файл, прикреплённый к работе"""

    def __init__(
        self,
        id: str,
        locator: str,
        original_name: str,
        remote_id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.locator = locator
        self.original_name = original_name
        self.remote_id = remote_id
        self.created_at = created_at or utcnow()

    @classmethod
    def create_attachment(
        cls, locator: str, original_name: str, remote_id: Optional[str] = None
    ) -> "Attachment":
        return cls(
            id=uuid.uuid4().hex,
            locator=locator,
            original_name=original_name,
            remote_id=remote_id
        )

    def to_dict(self) -> Dict[str, Any]:
        """Представление для хранения внутри документа работы"""
        return {
            "id": self.id,
            "locator": self.locator,
            "remote_id": self.remote_id,
            "original_name": self.original_name,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attachment":
        return cls(
            id=data["id"],
            locator=data["locator"],
            original_name=data["original_name"],
            remote_id=data.get("remote_id"),
            created_at=datetime.fromisoformat(data["created_at"])
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Attachment):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Attachment(id={self.id}, original_name={self.original_name})"


class Paper:
    """Работа, назначенная модератору.

    Список вложений упорядочен по времени добавления и меняется только
    через методы этого класса.
    """

    def __init__(
        self,
        id: uuid.UUID,
        owner_id: uuid.UUID,
        title: str,
        note: str,
        attachments: Optional[List[Attachment]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.owner_id = owner_id
        self.title = title
        self.note = note
        self._attachments = list(attachments or [])
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    @property
    def attachments(self) -> List[Attachment]:
        return list(self._attachments)

    def get_attachment(self, attachment_id: str) -> Attachment:
        for attachment in self._attachments:
            if attachment.id == attachment_id:
                return attachment
        raise NotFound("File not found.")

    def add_attachments(self, attachments: List[Attachment]) -> None:
        """Добавление вложений в конец списка"""
        known = {a.id for a in self._attachments}
        for attachment in attachments:
            if attachment.id in known:
                raise ValueError(f"Duplicate attachment id {attachment.id}")
            known.add(attachment.id)
        self._attachments.extend(attachments)
        self.touch()

    def remove_attachment(self, attachment_id: str) -> Attachment:
        """Удаление вложения по id"""
        attachment = self.get_attachment(attachment_id)
        self._attachments = [a for a in self._attachments if a.id != attachment_id]
        self.touch()
        return attachment

    def update_note(self, note: str) -> None:
        self.note = note
        self.touch()

    def touch(self) -> None:
        """Обновление updated_at; время никогда не идёт назад"""
        now = utcnow()
        self.updated_at = max(now, self.updated_at, self.created_at)

    @classmethod
    def create_paper(
        cls,
        owner_id: uuid.UUID,
        title: str,
        note: str,
        attachments: Optional[List[Attachment]] = None
    ) -> "Paper":
        """Создание новой работы"""
        now = utcnow()
        return cls(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title=title,
            note=note,
            attachments=attachments,
            created_at=now,
            updated_at=now
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Paper):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Paper(id={self.id}, title={self.title}, attachments={len(self._attachments)})"
