"""Tests for the media upload service."""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.errors import (
    FileTooLargeError,
    InvalidImageError,
    MediaNotFoundError,
    NoFileProvidedError,
    UnsupportedFileTypeError,
)
from app.services.media import BYTES_PER_MB, MediaService, build_media_key
from app.services.storage import BlobStorage, LocalStorage


def make_upload(
    body: bytes,
    filename: str | None = "cover.png",
    content_type: str = "image/png",
    size: int | None = None,
) -> UploadFile:
    return UploadFile(
        file=BytesIO(body),
        filename=filename,
        size=len(body) if size is None else size,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def storage_mock() -> AsyncMock:
    return AsyncMock(spec=BlobStorage)


@pytest.fixture
def service(storage_mock: AsyncMock) -> MediaService:
    return MediaService(storage_mock)


def test_build_media_key_shape() -> None:
    key = build_media_key("image/jpeg", now=1_700_000_000.5)
    prefix, _, extension = key.rpartition(".")
    assert prefix.startswith("uploads/1700000000500-")
    assert len(prefix.split("-")[-1]) == 12
    assert extension == "jpg"


def test_keys_are_unique() -> None:
    assert build_media_key("image/png", now=1.0) != build_media_key("image/png", now=1.0)


class TestUpload:
    """Tests for MediaService.upload."""

    async def test_stores_valid_png(
        self,
        service: MediaService,
        storage_mock: AsyncMock,
        png_bytes: bytes,
    ) -> None:
        result = await service.upload(make_upload(png_bytes))

        assert result.key.startswith("uploads/")
        assert result.key.endswith(".png")
        assert result.url == f"/api/media/{result.key}"
        assert result.filename == "cover.png"
        assert result.size == len(png_bytes)
        assert result.type == "image/png"
        storage_mock.put.assert_awaited_once_with(result.key, png_bytes, "image/png")

    async def test_jpeg_gets_jpg_extension(
        self,
        service: MediaService,
        make_image: Callable[..., bytes],
    ) -> None:
        body = make_image("JPEG")
        result = await service.upload(make_upload(body, "photo.jpeg", "image/jpeg"))
        assert result.key.endswith(".jpg")

    async def test_missing_file(self, service: MediaService) -> None:
        with pytest.raises(NoFileProvidedError):
            await service.upload(None)
        with pytest.raises(NoFileProvidedError):
            await service.upload(make_upload(b"", filename=""))

    async def test_rejects_unsupported_type(self, service: MediaService, storage_mock: AsyncMock) -> None:
        with pytest.raises(UnsupportedFileTypeError):
            await service.upload(make_upload(b"%PDF-1.7", "doc.pdf", "application/pdf"))
        storage_mock.put.assert_not_awaited()

    async def test_rejects_oversized_file_before_storing(
        self,
        service: MediaService,
        storage_mock: AsyncMock,
        png_bytes: bytes,
    ) -> None:
        body = png_bytes + b"\x00" * (6 * BYTES_PER_MB)

        with pytest.raises(FileTooLargeError) as exc_info:
            await service.upload(make_upload(body))

        assert exc_info.value.detail == "File too large. Maximum size is 5MB"
        storage_mock.put.assert_not_awaited()

    async def test_rejects_oversized_body_with_understated_size(
        self,
        service: MediaService,
        storage_mock: AsyncMock,
    ) -> None:
        body = b"\x89PNG" + b"\x00" * (6 * BYTES_PER_MB)
        with pytest.raises(FileTooLargeError):
            await service.upload(make_upload(body, size=10))
        storage_mock.put.assert_not_awaited()

    async def test_rejects_bytes_that_are_not_an_image(
        self,
        service: MediaService,
        storage_mock: AsyncMock,
    ) -> None:
        with pytest.raises(InvalidImageError):
            await service.upload(make_upload(b"definitely not a png"))
        storage_mock.put.assert_not_awaited()


class TestGetAndDelete:
    """Tests for reading back and deleting stored media."""

    async def test_round_trip_through_local_storage(self, tmp_path: Path, png_bytes: bytes) -> None:
        service = MediaService(LocalStorage(tmp_path))
        uploaded = await service.upload(make_upload(png_bytes))

        stored = await service.get(uploaded.key)
        assert stored.body == png_bytes
        assert stored.content_type == "image/png"

        await service.delete(uploaded.key)
        with pytest.raises(MediaNotFoundError):
            await service.get(uploaded.key)

    async def test_deleting_missing_key_is_not_an_error(
        self,
        service: MediaService,
        storage_mock: AsyncMock,
    ) -> None:
        storage_mock.delete.return_value = False
        await service.delete("uploads/missing.png")
        storage_mock.delete.assert_awaited_once_with("uploads/missing.png")
