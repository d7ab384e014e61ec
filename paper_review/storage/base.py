from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class UploadedFile:
    """Загруженный клиентом файл, уже прочитанный в память"""
    filename: str
    content: bytes
    content_type: Optional[str] = None


@dataclass
class StoredBlob:
    """Ссылка на сохранённое содержимое"""
    locator: str
    remote_id: Optional[str] = None


class BlobStore(ABC):
    """Хранилище содержимого файлов.

    Ошибки самого хранилища поднимаются как ``UpstreamFailure``.
    """

    @abstractmethod
    async def put(self, file: UploadedFile) -> StoredBlob:
        """Сохранение файла"""

    @abstractmethod
    async def delete(self, locator: str, remote_id: Optional[str] = None) -> None:
        """Удаление файла; отсутствующий файл не считается ошибкой"""
