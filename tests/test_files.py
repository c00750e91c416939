"""
Tests for reading image files into UploadedImage records.
"""

import base64
from pathlib import Path

import pytest

from pictag.uploader.files import guess_mime_type, load_image_files, read_image_file

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    (tmp_path / "cat.png").write_bytes(PNG_BYTES)
    (tmp_path / "dog.jpg").write_bytes(b"\xff\xd8\xff" + b"\x00" * 40)
    (tmp_path / "notes.txt").write_text("not an image")
    return tmp_path


class TestReadImageFile:
    @pytest.mark.asyncio
    async def test_reads_image(self, image_dir: Path) -> None:
        image = await read_image_file(image_dir / "cat.png")

        assert image.filename == "cat.png"
        assert image.mime_type == "image/png"
        assert image.size_bytes == len(PNG_BYTES)
        assert base64.b64decode(image.base64_data) == PNG_BYTES
        assert image.category is None
        assert image.selected is False

    @pytest.mark.asyncio
    async def test_skips_non_image(self, image_dir: Path) -> None:
        assert await read_image_file(image_dir / "notes.txt") is None

    @pytest.mark.asyncio
    async def test_skips_oversized(self, image_dir: Path) -> None:
        assert await read_image_file(image_dir / "dog.jpg", max_bytes=10) is None

    @pytest.mark.asyncio
    async def test_missing_file_is_skipped(self, tmp_path: Path) -> None:
        assert await read_image_file(tmp_path / "ghost.png") is None


class TestLoadImageFiles:
    @pytest.mark.asyncio
    async def test_keeps_order_and_drops_skipped(self, image_dir: Path) -> None:
        paths = [image_dir / "dog.jpg", image_dir / "notes.txt", image_dir / "cat.png"]

        images = await load_image_files(paths)

        assert [img.filename for img in images] == ["dog.jpg", "cat.png"]


def test_guess_mime_type_unknown_extension() -> None:
    assert guess_mime_type(Path("file.unknownext")) == "application/octet-stream"
