from fastapi import Request

from paper_review.core.config import Settings
from paper_review.storage.base import BlobStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store
