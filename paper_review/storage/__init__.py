from paper_review.core.config import Settings
from paper_review.storage.base import BlobStore, StoredBlob, UploadedFile
from paper_review.storage.local import LocalBlobStore


def build_blob_store(settings: Settings) -> BlobStore:
    """Выбор хранилища файлов по настройкам"""
    if settings.storage_backend == "local":
        return LocalBlobStore(settings.upload_dir)

    if settings.storage_backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET must be set for the s3 storage backend")

        from paper_review.storage.s3 import S3BlobStore

        return S3BlobStore(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            prefix=settings.s3_prefix,
            public_url=settings.s3_public_url,
        )

    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


__all__ = [
    "BlobStore",
    "StoredBlob",
    "UploadedFile",
    "LocalBlobStore",
    "build_blob_store",
]
