"""In-memory implementation of IMediaRepository."""

from __future__ import annotations

from dataclasses import replace

from aroma.domain.entities import Image
from aroma.domain.value_objects import Dimension
from aroma.infrastructure.memory.base import InMemoryRepository
from aroma.ports.assertions import check_dimension, check_image, check_media_id
from aroma.ports.exceptions import MediaDoesNotExistError
from aroma.ports.repositories import IMediaRepository


class InMemoryMediaRepository(InMemoryRepository, IMediaRepository):
    """Blobs keyed by media id; thumbnails keyed by media id and dimension."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._media: dict[str, Image] = {}
        self._thumbnails: dict[str, dict[Dimension, Image]] = {}

    def save_media(self, media_id: str, image: Image) -> None:
        check_media_id(media_id)
        check_image(image, self._defaults.max_media_size_bytes)
        with self._lock:
            self._media[media_id] = self._copy(image)

    def get_media(self, media_id: str) -> Image:
        check_media_id(media_id)
        with self._lock:
            image = self._media.get(media_id)
            if image is None:
                raise MediaDoesNotExistError(f"Media does not exist: {media_id}")
            return self._copy(image)

    def contains_media(self, media_id: str) -> bool:
        check_media_id(media_id)
        with self._lock:
            return media_id in self._media

    def delete_media(self, media_id: str) -> None:
        check_media_id(media_id)
        with self._lock:
            if self._media.pop(media_id, None) is None:
                raise MediaDoesNotExistError(f"Media does not exist: {media_id}")
            self._thumbnails.pop(media_id, None)

    def save_thumbnail(self, media_id: str, dimension: Dimension, image: Image) -> None:
        check_media_id(media_id)
        check_dimension(dimension)
        check_image(image, self._defaults.max_thumbnail_size_bytes)
        with self._lock:
            thumbnails = self._thumbnails.setdefault(media_id, {})
            thumbnails[dimension] = replace(self._copy(image), dimension=dimension)

    def get_thumbnail(self, media_id: str, dimension: Dimension) -> Image:
        check_media_id(media_id)
        check_dimension(dimension)
        with self._lock:
            image = self._thumbnails.get(media_id, {}).get(dimension)
            if image is None:
                raise MediaDoesNotExistError(
                    f"Thumbnail {dimension} does not exist for media {media_id}"
                )
            return self._copy(image)

    def contains_thumbnail(self, media_id: str, dimension: Dimension) -> bool:
        check_media_id(media_id)
        check_dimension(dimension)
        with self._lock:
            return dimension in self._thumbnails.get(media_id, {})

    def delete_thumbnail(self, media_id: str, dimension: Dimension) -> None:
        with self._lock:
            if not self.contains_thumbnail(media_id, dimension):
                raise MediaDoesNotExistError(
                    f"Thumbnail {dimension} does not exist for media {media_id}"
                )
            del self._thumbnails[media_id][dimension]

    def delete_all_thumbnails(self, media_id: str) -> None:
        check_media_id(media_id)
        with self._lock:
            self._thumbnails.pop(media_id, None)
