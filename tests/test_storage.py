"""Тесты хранилищ файлов: локальный диск и S3 (через мок сессии aioboto3)."""
import asyncio
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

from paper_review.core.errors import UpstreamFailure
from paper_review.storage import LocalBlobStore, build_blob_store
from paper_review.storage.base import UploadedFile
from paper_review.storage.local import safe_filename
from paper_review.storage.s3 import S3BlobStore


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\docs\\review.docx", "review.docx"),
        ("", "file"),
    ],
)
def test_safe_filename(name, expected):
    assert safe_filename(name) == expected


@pytest.mark.asyncio
async def test_local_put_writes_file_with_timestamp_prefix(tmp_path):
    store = LocalBlobStore(str(tmp_path / "uploads"))

    blob = await store.put(UploadedFile(filename="a.txt", content=b"hello"))

    path = Path(blob.locator)
    assert path.read_bytes() == b"hello"
    assert path.parent == tmp_path / "uploads"
    assert path.name.endswith("-a.txt")
    assert blob.remote_id is None


@pytest.mark.asyncio
async def test_local_same_name_twice_gives_distinct_files(tmp_path):
    store = LocalBlobStore(str(tmp_path))

    first = await store.put(UploadedFile(filename="a.txt", content=b"1"))
    second = await store.put(UploadedFile(filename="a.txt", content=b"2"))

    assert first.locator != second.locator
    assert Path(first.locator).read_bytes() == b"1"
    assert Path(second.locator).read_bytes() == b"2"


@pytest.mark.asyncio
async def test_local_concurrent_uploads_in_same_millisecond(tmp_path, monkeypatch):
    monkeypatch.setattr("paper_review.storage.local.time", SimpleNamespace(time=lambda: 1000.0))
    store = LocalBlobStore(str(tmp_path))
    (tmp_path / "1000000-a.txt").write_bytes(b"existing")

    blobs = await asyncio.gather(
        *(store.put(UploadedFile(filename="a.txt", content=str(n).encode())) for n in range(5))
    )

    assert len({b.locator for b in blobs}) == 5
    assert sorted(Path(b.locator).read_bytes() for b in blobs) == [b"0", b"1", b"2", b"3", b"4"]
    assert (tmp_path / "1000000-a.txt").read_bytes() == b"existing"


@pytest.mark.asyncio
async def test_local_delete_removes_file_and_tolerates_missing(tmp_path):
    store = LocalBlobStore(str(tmp_path))
    blob = await store.put(UploadedFile(filename="a.txt", content=b"x"))

    await store.delete(blob.locator)
    assert not Path(blob.locator).exists()

    # повторное удаление не ошибка
    await store.delete(blob.locator)


@pytest.mark.asyncio
async def test_local_delete_refuses_paths_outside_upload_dir(tmp_path):
    outside = tmp_path / "secret.txt"
    outside.write_bytes(b"keep")
    store = LocalBlobStore(str(tmp_path / "uploads"))

    with pytest.raises(UpstreamFailure):
        await store.delete(str(outside))
    assert outside.exists()


def _s3_session(s3_client):
    client_cm = MagicMock()
    client_cm.__aenter__ = AsyncMock(return_value=s3_client)
    client_cm.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.client.return_value = client_cm
    return session


@pytest.mark.asyncio
async def test_s3_put_uploads_under_prefix():
    s3 = AsyncMock()
    store = S3BlobStore(bucket="papers-bucket", region="eu-west-1", session=_s3_session(s3))

    blob = await store.put(UploadedFile(filename="paper.pdf", content=b"%PDF", content_type="application/pdf"))

    s3.put_object.assert_awaited_once()
    params = s3.put_object.await_args.kwargs
    assert params["Bucket"] == "papers-bucket"
    assert params["Body"] == b"%PDF"
    assert params["ContentType"] == "application/pdf"
    assert params["Key"] == blob.remote_id
    assert blob.remote_id.startswith("papers/")
    assert blob.remote_id.endswith("-paper.pdf")
    assert blob.locator == f"https://papers-bucket.s3.eu-west-1.amazonaws.com/{blob.remote_id}"


@pytest.mark.asyncio
async def test_s3_locator_uses_public_url_when_configured():
    store = S3BlobStore(
        bucket="b", public_url="https://cdn.example.org/", prefix="", session=_s3_session(AsyncMock())
    )

    blob = await store.put(UploadedFile(filename="x.txt", content=b"x"))

    assert "/" not in blob.remote_id
    assert blob.locator == f"https://cdn.example.org/{blob.remote_id}"


@pytest.mark.asyncio
async def test_s3_delete_uses_remote_id():
    s3 = AsyncMock()
    store = S3BlobStore(bucket="b", session=_s3_session(s3))

    await store.delete("https://b.s3.amazonaws.com/papers/k", remote_id="papers/k")

    s3.delete_object.assert_awaited_once_with(Bucket="b", Key="papers/k")


@pytest.mark.asyncio
async def test_s3_errors_become_upstream_failures():
    s3 = AsyncMock()
    error = ClientError({"Error": {"Code": "500", "Message": "boom"}}, "DeleteObject")
    s3.delete_object.side_effect = error
    s3.put_object.side_effect = error
    store = S3BlobStore(bucket="b", session=_s3_session(s3))

    with pytest.raises(UpstreamFailure):
        await store.delete("loc", remote_id="papers/k")
    with pytest.raises(UpstreamFailure):
        await store.put(UploadedFile(filename="x.txt", content=b"x"))


@pytest.mark.asyncio
async def test_s3_delete_without_remote_id_fails():
    store = S3BlobStore(bucket="b", session=_s3_session(AsyncMock()))

    with pytest.raises(UpstreamFailure):
        await store.delete("https://b.s3.amazonaws.com/papers/k")


def test_build_blob_store_selects_backend(settings):
    assert isinstance(build_blob_store(settings), LocalBlobStore)

    s3_settings = settings.model_copy(
        update={"storage_backend": "s3", "s3_bucket": "bucket", "s3_region": "us-east-1"}
    )
    store = build_blob_store(s3_settings)
    assert isinstance(store, S3BlobStore)
    assert store.bucket == "bucket"


def test_build_blob_store_requires_bucket_for_s3(settings):
    with pytest.raises(ValueError):
        build_blob_store(settings.model_copy(update={"storage_backend": "s3"}))
