import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

import aiofiles

from pictag.uploader.state import UploadedImage

logger = logging.getLogger(__name__)


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


async def read_image_file(path: str | Path, max_bytes: int | None = None) -> UploadedImage | None:
    """Read one file into an UploadedImage. Non-image or oversized files give None."""
    path = Path(path)
    mime_type = guess_mime_type(path)
    if not mime_type.startswith("image/"):
        logger.info("Skipping non-image file: %s (%s)", path.name, mime_type)
        return None

    try:
        async with aiofiles.open(path, "rb") as f:
            file_bytes = await f.read()
    except OSError as e:
        logger.error("Error reading file %s: %s", path, e)
        return None

    if max_bytes is not None and len(file_bytes) > max_bytes:
        logger.warning("Skipping %s: %d bytes exceeds limit of %d", path.name, len(file_bytes), max_bytes)
        return None

    logger.info("Image %s read. Size: %d bytes", path.name, len(file_bytes))
    return UploadedImage(
        filename=path.name,
        base64_data=base64.b64encode(file_bytes).decode("utf-8"),
        size_bytes=len(file_bytes),
        mime_type=mime_type,
    )


async def load_image_files(paths: list[str | Path], max_bytes: int | None = None) -> list[UploadedImage]:
    """Read files concurrently; keeps input order and drops skipped files."""
    results = await asyncio.gather(*(read_image_file(p, max_bytes) for p in paths))
    return [img for img in results if img is not None]
