import logging
import uuid
from typing import Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from paper_review.core.errors import UpstreamFailure
from paper_review.storage.base import BlobStore, StoredBlob, UploadedFile
from paper_review.storage.local import safe_filename

logger = logging.getLogger(__name__)


class S3BlobStore(BlobStore):
    """Файлы в S3 или совместимом хранилище.

    ``remote_id`` вложения: ключ объекта в бакете; ``locator``: его URL.
    """

    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        prefix: str = "papers",
        public_url: Optional[str] = None,
        session: Optional[aioboto3.Session] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.prefix = prefix.strip("/")
        self.public_url = public_url.rstrip("/") if public_url else None
        self._session = session or aioboto3.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
        )

    def _client(self):
        return self._session.client("s3", endpoint_url=self.endpoint_url, region_name=self.region)

    def _key(self, filename: str) -> str:
        name = f"{uuid.uuid4().hex}-{safe_filename(filename)}"
        return f"{self.prefix}/{name}" if self.prefix else name

    def url_for(self, key: str) -> str:
        if self.public_url:
            return f"{self.public_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        if self.region:
            return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    async def put(self, file: UploadedFile) -> StoredBlob:
        key = self._key(file.filename)
        params = {"Bucket": self.bucket, "Key": key, "Body": file.content}
        if file.content_type:
            params["ContentType"] = file.content_type

        try:
            async with self._client() as s3:
                await s3.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            logger.exception(f"Failed to upload {file.filename} to s3://{self.bucket}")
            raise UpstreamFailure("Error storing file") from e

        logger.info(f"Uploaded {file.filename} to s3://{self.bucket}/{key}")
        return StoredBlob(locator=self.url_for(key), remote_id=key)

    async def delete(self, locator: str, remote_id: Optional[str] = None) -> None:
        if not remote_id:
            raise UpstreamFailure(f"Attachment {locator} has no remote id")

        try:
            async with self._client() as s3:
                await s3.delete_object(Bucket=self.bucket, Key=remote_id)
        except (BotoCoreError, ClientError) as e:
            raise UpstreamFailure("Error deleting file") from e

        logger.info(f"Deleted s3://{self.bucket}/{remote_id}")
