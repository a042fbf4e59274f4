"""Cassandra implementation of IMediaRepository.

Blobs live in the primary table; their thumbnails share a partition keyed
by media id and clustered by dimension, so removing a blob and every
thumbnail is a two-statement batch.
"""

from __future__ import annotations

from aroma.domain.entities import Image
from aroma.domain.value_objects import Dimension
from aroma.infrastructure.cassandra import statements
from aroma.infrastructure.cassandra.base import CassandraRepository
from aroma.infrastructure.cassandra.mappers import map_image
from aroma.ports.assertions import check_dimension, check_image, check_media_id
from aroma.ports.exceptions import MediaDoesNotExistError
from aroma.ports.repositories import IMediaRepository


class CassandraMediaRepository(CassandraRepository, IMediaRepository):
    """Cassandra-backed repository for media blobs and thumbnails."""

    entity = "media"

    def save_media(self, media_id: str, image: Image) -> None:
        with self._validating("save_media"):
            check_media_id(media_id)
            check_image(image, self._defaults.max_media_size_bytes)

        self._execute(statements.insert_media(media_id, image), "save_media", media_id=media_id)
        self._probe.entity_saved(media_id, size=len(image.data))

    def get_media(self, media_id: str) -> Image:
        with self._validating("get_media"):
            check_media_id(media_id)

        row = self._one(statements.select_media(media_id), "get_media", media_id=media_id)
        if row is None:
            self._probe.entity_not_found(media_id)
            raise MediaDoesNotExistError(f"Media does not exist: {media_id}")

        self._probe.entity_retrieved(media_id)
        return map_image(row)

    def contains_media(self, media_id: str) -> bool:
        with self._validating("contains_media"):
            check_media_id(media_id)

        return self._count(statements.count_media(media_id), "contains_media", media_id=media_id) > 0

    def delete_media(self, media_id: str) -> None:
        if not self.contains_media(media_id):
            self._probe.entity_not_found(media_id)
            raise MediaDoesNotExistError(f"Media does not exist: {media_id}")

        self._execute(statements.delete_media(media_id), "delete_media", media_id=media_id)
        self._probe.entity_deleted(media_id)

    def save_thumbnail(self, media_id: str, dimension: Dimension, image: Image) -> None:
        with self._validating("save_thumbnail"):
            check_media_id(media_id)
            check_dimension(dimension)
            check_image(image, self._defaults.max_thumbnail_size_bytes)

        self._execute(
            statements.insert_thumbnail(media_id, dimension, image),
            "save_thumbnail",
            media_id=media_id,
            dimension=str(dimension),
        )
        self._probe.entity_saved(media_id, dimension=str(dimension), size=len(image.data))

    def get_thumbnail(self, media_id: str, dimension: Dimension) -> Image:
        with self._validating("get_thumbnail"):
            check_media_id(media_id)
            check_dimension(dimension)

        row = self._one(
            statements.select_thumbnail(media_id, dimension),
            "get_thumbnail",
            media_id=media_id,
            dimension=str(dimension),
        )
        if row is None:
            self._probe.entity_not_found(media_id)
            raise MediaDoesNotExistError(
                f"Thumbnail {dimension} does not exist for media {media_id}"
            )

        self._probe.entity_retrieved(media_id)
        return map_image(row)

    def contains_thumbnail(self, media_id: str, dimension: Dimension) -> bool:
        with self._validating("contains_thumbnail"):
            check_media_id(media_id)
            check_dimension(dimension)

        count = self._count(
            statements.count_thumbnail(media_id, dimension),
            "contains_thumbnail",
            media_id=media_id,
            dimension=str(dimension),
        )
        return count > 0

    def delete_thumbnail(self, media_id: str, dimension: Dimension) -> None:
        if not self.contains_thumbnail(media_id, dimension):
            self._probe.entity_not_found(media_id)
            raise MediaDoesNotExistError(
                f"Thumbnail {dimension} does not exist for media {media_id}"
            )

        self._execute(
            statements.delete_thumbnail(media_id, dimension),
            "delete_thumbnail",
            media_id=media_id,
            dimension=str(dimension),
        )
        self._probe.entity_deleted(media_id, dimension=str(dimension))

    def delete_all_thumbnails(self, media_id: str) -> None:
        with self._validating("delete_all_thumbnails"):
            check_media_id(media_id)

        self._execute(
            statements.delete_all_thumbnails(media_id),
            "delete_all_thumbnails",
            media_id=media_id,
        )
        self._probe.entity_deleted(media_id, thumbnails="all")
