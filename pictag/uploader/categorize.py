import asyncio
import logging
import string

import httpx

from pictag.config import get_settings
from pictag.integrations.relay_client import RelayClient
from pictag.prompts.categorize import build_categorize_request
from pictag.uploader.state import UploadedImage, UploaderState

logger = logging.getLogger(__name__)

_PUNCTUATION = str.maketrans("", "", string.punctuation)


def sanitize_category(raw: str | None) -> str:
    """Reduce a free-text model answer to a single title-cased word."""
    text = (raw or "").strip().translate(_PUNCTUATION)
    first_line = text.split("\n", 1)[0]
    tokens = first_line.split()
    if not tokens:
        return ""
    word = tokens[0]
    return word[:1].upper() + word[1:].lower()


def match_category(raw: str | None, categories: list[str]) -> str | None:
    category = sanitize_category(raw)
    return category if category in categories else None


async def classify_image(
    client: RelayClient,
    image: UploadedImage,
    model: str,
    categories: list[str],
) -> str | None:
    """Ask the relay for one image's category. Failures resolve to None."""
    request = build_categorize_request(image.base64_data, image.mime_type, model, categories)
    try:
        response = await client.complete_image(request)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Classification failed for %s: %s", image.filename, e)
        return None

    raw = response.content[0].text if response.content else ""
    category = match_category(raw, categories)
    if category is None:
        logger.info("Unrecognized category for %s: %r", image.filename, raw[:100])
    else:
        logger.info("Classified %s as %s", image.filename, category)
    return category


async def categorize_images(
    state: UploaderState,
    client: RelayClient,
    model: str | None = None,
    categories: list[str] | None = None,
) -> UploaderState:
    """Classify every image concurrently and assign recognized categories.

    A failed or unrecognized classification leaves that image untouched; the
    batch always settles.
    """
    settings = get_settings()
    if model is None:
        model = settings.classifier_model
    if categories is None:
        categories = settings.categories

    images = state.images
    if not images:
        return state

    state = state.set_loading(True)
    outcomes = await asyncio.gather(
        *(classify_image(client, img, model, categories) for img in images),
        return_exceptions=True,
    )

    results: list[str | None] = []
    for img, outcome in zip(images, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("Classification failed for %s: %s", img.filename, outcome)
            outcome = None
        results.append(outcome)

    for img, category in zip(images, results):
        if category is not None:
            state = state.set_category(img.filename, category)

    assigned = sum(1 for c in results if c is not None)
    logger.info("Categorized %d of %d images", assigned, len(images))
    return state.set_loading(False)
