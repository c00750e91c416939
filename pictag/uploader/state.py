"""Uploader state: the in-memory image collection and its UI flags.

``UploaderState`` is immutable. Every operation returns a new state, so a
rendering layer can hold one value and swap it on each user action instead
of mutating shared objects.
"""

import logging
from collections import Counter
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class UploadedImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    base64_data: str
    size_bytes: int
    mime_type: str
    category: Optional[str] = None
    selected: bool = False

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


class UploaderState(BaseModel):
    model_config = ConfigDict(frozen=True)

    images: tuple[UploadedImage, ...] = ()
    is_drag_over: bool = False
    is_loading: bool = False

    # --- internal ---

    def _map_images(self, fn) -> "UploaderState":
        return self.model_copy(update={"images": tuple(fn(img) for img in self.images)})

    # --- collection ---

    def add_images(self, new_images: Iterable[UploadedImage]) -> "UploaderState":
        """Append images, skipping any filename already present."""
        seen = {img.filename for img in self.images}
        added = []
        for img in new_images:
            if img.filename in seen:
                logger.info("Skipping duplicate image: %s", img.filename)
                continue
            seen.add(img.filename)
            added.append(img)
        return self.model_copy(update={"images": self.images + tuple(added)})

    def remove_image(self, filename: str) -> "UploaderState":
        return self.model_copy(
            update={"images": tuple(img for img in self.images if img.filename != filename)}
        )

    def clear(self) -> "UploaderState":
        return self.model_copy(update={"images": ()})

    # --- categories ---

    def set_category(self, filename: str, category: Optional[str]) -> "UploaderState":
        return self._map_images(
            lambda img: img.model_copy(update={"category": category})
            if img.filename == filename else img
        )

    def set_category_for_selected(self, category: Optional[str]) -> "UploaderState":
        return self._map_images(
            lambda img: img.model_copy(update={"category": category}) if img.selected else img
        )

    def clear_categories(self) -> "UploaderState":
        return self._map_images(lambda img: img.model_copy(update={"category": None}))

    # --- selection ---

    def toggle_selection(self, filename: str) -> "UploaderState":
        return self._map_images(
            lambda img: img.model_copy(update={"selected": not img.selected})
            if img.filename == filename else img
        )

    def select_all(self) -> "UploaderState":
        return self._map_images(lambda img: img.model_copy(update={"selected": True}))

    def clear_selection(self) -> "UploaderState":
        return self._map_images(lambda img: img.model_copy(update={"selected": False}))

    # --- UI flags ---

    def set_drag_over(self, value: bool) -> "UploaderState":
        return self.model_copy(update={"is_drag_over": value})

    def set_loading(self, value: bool) -> "UploaderState":
        return self.model_copy(update={"is_loading": value})

    # --- queries ---

    def get_image(self, filename: str) -> Optional[UploadedImage]:
        return next((img for img in self.images if img.filename == filename), None)

    def get_images_by_category(self, category: str) -> list[UploadedImage]:
        return [img for img in self.images if img.category == category]

    def selected_images(self) -> list[UploadedImage]:
        return [img for img in self.images if img.selected]

    def uncategorized_images(self) -> list[UploadedImage]:
        return [img for img in self.images if img.category is None]

    def category_counts(self) -> dict[str, int]:
        return dict(Counter(img.category for img in self.images if img.category))

    @property
    def total_size_bytes(self) -> int:
        return sum(img.size_bytes for img in self.images)
