"""Owner repository adapters.

``OwnerRepositoryAdapter`` bridges a catalog kind's typed repository
(``IOwnerEntityRepository[PhysicalGood]``, ...) to the entity-agnostic
``IImageOwnerRepository`` consumed by ``ImageOwnershipService``.

Each catalog module subclasses it and pins ``owner_model``.  Owners
handed back to the adapter are checked against that model before being
passed to the typed repository; a mismatch raises ``IncorrectOwnerType``
instead of reaching the database.  Every other error from the wrapped
repository propagates unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, List, Optional, Sequence, Type

from modules.images.exceptions import IncorrectOwnerType
from modules.images.repositories.interfaces import IImageOwnerRepository, ImageOwner

if TYPE_CHECKING:
    from django.db import models

    from modules.images.constants import BatchUpdateField
    from modules.images.models import Image
    from modules.images.repositories.interfaces import IOwnerEntityRepository


class OwnerRepositoryAdapter(IImageOwnerRepository):
    """Adapts one typed owner repository to ``IImageOwnerRepository``."""

    owner_model: ClassVar[Type[models.Model]]

    def __init__(self, repository: IOwnerEntityRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Type conversion
    # ------------------------------------------------------------------

    def _to_entity(self, owner: ImageOwner):
        if not isinstance(owner, self.owner_model):
            raise IncorrectOwnerType(
                f"Expected {self.owner_model.__name__}, "
                f"got {type(owner).__name__}."
            )
        return owner

    def _to_entities(self, owners: Sequence[ImageOwner]) -> list:
        return [self._to_entity(owner) for owner in owners]

    # ------------------------------------------------------------------
    # Transactional scope
    # ------------------------------------------------------------------

    @property
    def db_alias(self) -> str:
        return self._repo.db_alias

    def using(self, alias: str) -> OwnerRepositoryAdapter:
        return type(self)(self._repo.using(alias))

    def atomic(self):
        return self._repo.atomic()

    # ------------------------------------------------------------------
    # Delegation
    # ------------------------------------------------------------------

    def get_with_unpublished(self, id: str, lock: bool = False) -> Optional[ImageOwner]:
        return self._repo.get_with_unpublished(id, lock=lock)

    def list_with_unpublished_by_ids(
        self, ids: Sequence[str], lock: bool = False
    ) -> List[ImageOwner]:
        return list(self._repo.list_with_unpublished_by_ids(ids, lock=lock))

    def add_image(self, owner: ImageOwner, image: Image) -> None:
        self._repo.add_image(self._to_entity(owner), image)

    def add_image_batch(self, owners: Sequence[ImageOwner], image: Image) -> None:
        self._repo.add_image_batch(self._to_entities(owners), image)

    def delete_image(self, owner: ImageOwner, media_service_id: str) -> int:
        return self._repo.delete_image(self._to_entity(owner), media_service_id)

    def delete_image_batch(self, owners: Sequence[ImageOwner], image: Image) -> int:
        return self._repo.delete_image_batch(self._to_entities(owners), image)

    def batch_update(self, owners: Sequence[ImageOwner], field: BatchUpdateField) -> int:
        return self._repo.batch_update(self._to_entities(owners), field)

    def find_owner_ids_by_image_id(
        self, media_service_id: str, owner_ids: Sequence[str]
    ) -> List[str]:
        return self._repo.find_owner_ids_by_image_id(media_service_id, owner_ids)

    def decrement_image_count(self, owner_ids: Sequence[str]) -> int:
        return self._repo.decrement_image_count(owner_ids)
