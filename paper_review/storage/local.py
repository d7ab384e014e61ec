import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Optional

from paper_review.core.errors import UpstreamFailure
from paper_review.storage.base import BlobStore, StoredBlob, UploadedFile

logger = logging.getLogger(__name__)


def safe_filename(name: str) -> str:
    """Имя файла без каталогов и управляющих символов"""
    name = os.path.basename(name.replace("\\", "/")).strip()
    name = "".join(ch for ch in name if ch.isprintable())
    return name or "file"


class LocalBlobStore(BlobStore):
    """Файлы на локальном диске, имя вида ``<ms>-<original>``"""

    def __init__(self, base_path: str):
        self.base_path = Path(base_path)

    def _resolve(self, locator: str) -> Path:
        path = Path(locator).resolve()
        base = self.base_path.resolve()
        if base != path and base not in path.parents:
            raise UpstreamFailure(f"Locator {locator} is outside of the upload directory")
        return path

    def _write(self, filename: str, content: bytes) -> Path:
        self.base_path.mkdir(parents=True, exist_ok=True)
        stamp = int(time.time() * 1000)
        while True:
            path = self.base_path / f"{stamp}-{filename}"
            try:
                # "x" не перезаписывает файл, загруженный параллельно с тем же именем
                with open(path, "xb") as fh:
                    fh.write(content)
                return path
            except FileExistsError:
                stamp += 1

    async def put(self, file: UploadedFile) -> StoredBlob:
        try:
            path = await asyncio.to_thread(self._write, safe_filename(file.filename), file.content)
        except OSError as e:
            logger.exception(f"Failed to store {file.filename} in {self.base_path}")
            raise UpstreamFailure("Error storing file") from e

        logger.info(f"Stored {file.filename} as {path}")
        return StoredBlob(locator=path.as_posix())

    async def delete(self, locator: str, remote_id: Optional[str] = None) -> None:
        path = self._resolve(locator)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            logger.warning(f"File {locator} is already gone")
            return
        except OSError as e:
            raise UpstreamFailure("Error deleting file") from e
        logger.info(f"Deleted {locator}")
