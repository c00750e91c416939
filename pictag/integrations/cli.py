"""Command-line uploader: read images, categorize them through the relay."""

import argparse
import asyncio
import logging

from pictag.config import get_settings
from pictag.integrations.relay_client import RelayClient
from pictag.uploader.categorize import categorize_images
from pictag.uploader.files import load_image_files
from pictag.uploader.state import UploaderState

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Categorize images with the pictag relay.")
    parser.add_argument("files", nargs="+", help="Image files to categorize.")
    parser.add_argument("--relay-url", default=settings.relay_base_url, help="Base URL of the relay.")
    parser.add_argument("--model", default=settings.classifier_model, help="Upstream model name.")
    parser.add_argument(
        "--categories",
        default=",".join(settings.categories),
        help="Comma-separated list of allowed categories.",
    )
    return parser.parse_args(argv)


def format_report(state: UploaderState) -> str:
    lines = [f"{img.filename}\t{img.category or '-'}" for img in state.images]
    lines.append("")
    for category, count in sorted(state.category_counts().items()):
        lines.append(f"{category}: {count}")
    lines.append(f"Uncategorized: {len(state.uncategorized_images())}")
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> UploaderState:
    settings = get_settings()
    categories = [c.strip() for c in args.categories.split(",") if c.strip()]

    images = await load_image_files(args.files, max_bytes=settings.max_image_size_mb * 1024 * 1024)
    state = UploaderState().add_images(images)
    if not state.images:
        logger.warning("No images to categorize")
        return state

    async with RelayClient(base_url=args.relay_url) as client:
        return await categorize_images(state, client, model=args.model, categories=categories)


def main(argv: list[str] | None = None):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    state = asyncio.run(run(parse_args(argv)))
    print(format_report(state))


if __name__ == "__main__":
    main()
