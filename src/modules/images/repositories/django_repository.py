"""Django ORM implementations of the image ownership repositories.

``OwnerEntityDjangoRepository`` is the shared implementation behind every
catalog kind's typed repository; subclasses only pin ``model``.  Image
associations are stored in the polymorphic ``images`` table keyed by
(``owner_type``, ``owner_id``).

Error handling follows the Null Object pattern for look-ups: missing or
malformed IDs yield ``None`` / empty lists.  Database errors propagate
unchanged; the Service Layer decides how to report them.
"""

from __future__ import annotations

from typing import ClassVar, List, Optional, Sequence, Type, TypeVar

import structlog
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, models, transaction
from django.db.models import F
from django.utils import timezone

from modules.core.models import CatalogItemModel
from modules.images.constants import BatchUpdateField
from modules.images.models import Image
from modules.images.repositories.interfaces import (
    IImageRepository,
    IOwnerEntityRepository,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=CatalogItemModel)


class ImageDjangoRepository(IImageRepository):
    """Concrete Image repository backed by Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    @property
    def db_alias(self) -> str:
        return self._using

    def using(self, alias: str) -> ImageDjangoRepository:
        return ImageDjangoRepository(using=alias)

    def atomic(self) -> transaction.Atomic:
        return transaction.atomic(using=self._using)


class OwnerEntityDjangoRepository(IOwnerEntityRepository[M]):
    """Typed owner repository for one ``CatalogItemModel`` subclass."""

    model: ClassVar[Type[CatalogItemModel]]

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    # ------------------------------------------------------------------
    # Transactional scope
    # ------------------------------------------------------------------

    @property
    def db_alias(self) -> str:
        return self._using

    def using(self, alias: str):
        return type(self)(using=alias)

    def atomic(self) -> transaction.Atomic:
        return transaction.atomic(using=self._using)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _alive(self, lock: bool = False) -> models.QuerySet:
        queryset = self.model.objects.db_manager(self._using).alive()
        if lock:
            queryset = queryset.select_for_update()
        return queryset

    def _images(self, owner_ids: Sequence[object]) -> models.QuerySet:
        owner_type = ContentType.objects.db_manager(self._using).get_for_model(
            self.model
        )
        return Image.objects.using(self._using).filter(
            owner_type=owner_type, owner_id__in=list(owner_ids)
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_with_unpublished(self, id: str, lock: bool = False) -> Optional[M]:
        """Retrieve a record regardless of ``in_stock``; soft-deleted rows excluded.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._alive(lock).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list_with_unpublished_by_ids(
        self, ids: Sequence[str], lock: bool = False
    ) -> List[M]:
        """Retrieve records by IDs, ordered by PK so row locks are taken in a stable order."""
        if not ids:
            return []
        try:
            return list(self._alive(lock).filter(id__in=list(ids)).order_by("id"))
        except (ValueError, ValidationError):
            return []

    def find_owner_ids_by_image_id(
        self, media_service_id: str, owner_ids: Sequence[str]
    ) -> List[str]:
        if not owner_ids:
            return []
        found = (
            self._images(owner_ids)
            .filter(media_service_id=media_service_id)
            .values_list("owner_id", flat=True)
            .distinct()
        )
        return [str(owner_id) for owner_id in found]

    # ------------------------------------------------------------------
    # Image associations
    # ------------------------------------------------------------------

    def add_image(self, entity: M, image: Image) -> None:
        """Attach a copy of ``image`` to ``entity``."""
        row = image.copy_for(entity)
        row.save(using=self._using)
        logger.info(
            "owner.image_attached",
            owner_model=self.model._meta.label,
            owner_id=str(entity.id),
            media_service_id=str(image.media_service_id),
        )

    def add_image_batch(self, entities: Sequence[M], image: Image) -> None:
        """Attach a copy of ``image`` to every entity with a single INSERT."""
        if not entities:
            return
        Image.objects.using(self._using).bulk_create(
            [image.copy_for(entity) for entity in entities]
        )
        logger.info(
            "owner.image_batch_attached",
            owner_model=self.model._meta.label,
            owner_count=len(entities),
            media_service_id=str(image.media_service_id),
        )

    def delete_image(self, entity: M, media_service_id: str) -> int:
        deleted, _ = (
            self._images([entity.id]).filter(media_service_id=media_service_id).delete()
        )
        return deleted

    def delete_image_batch(self, entities: Sequence[M], image: Image) -> int:
        if not entities:
            return 0
        deleted, _ = (
            self._images([entity.id for entity in entities])
            .filter(media_service_id=image.media_service_id)
            .delete()
        )
        return deleted

    # ------------------------------------------------------------------
    # Counters / bulk writes
    # ------------------------------------------------------------------

    def batch_update(self, entities: Sequence[M], field: BatchUpdateField) -> int:
        """Persist one column of many records in a single ``bulk_update``.

        The value written is whatever each in-memory instance currently holds.
        """
        if not entities:
            return 0
        now = timezone.now()
        for entity in entities:
            entity.updated_at = now
        return self.model.objects.db_manager(self._using).bulk_update(
            list(entities), [BatchUpdateField(field).value, "updated_at"]
        )

    def decrement_image_count(self, owner_ids: Sequence[str]) -> int:
        """Decrement ``uploaded_image_amount`` in SQL; never drops below zero."""
        if not owner_ids:
            return 0
        return (
            self._alive()
            .filter(id__in=list(owner_ids), uploaded_image_amount__gt=0)
            .update(
                uploaded_image_amount=F("uploaded_image_amount") - 1,
                updated_at=timezone.now(),
            )
        )
