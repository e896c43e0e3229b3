"""Image ownership repository interfaces.

Two layers of contracts live here:

- ``IOwnerEntityRepository[T]``: the strongly typed data access every
  catalog kind implements for its own model (``PhysicalGood``,
  ``Seminar``, ...).
- ``IImageOwnerRepository``: the entity-agnostic capability set consumed by
  ``ImageOwnershipService``.  One adapter per catalog kind bridges the
  typed repository to this contract (see ``modules.images.adapters``).

``IImageRepository`` scopes transactions that are not tied to a single
owner kind (batch operations).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Generic, List, Optional, Protocol, Sequence, TypeVar
from uuid import UUID

from modules.core.repositories.interfaces import ITransactionalRepository

if TYPE_CHECKING:
    from modules.images.constants import BatchUpdateField
    from modules.images.models import Image


class ImageOwner(Protocol):
    """Any catalog item able to hold images."""

    id: UUID
    uploaded_image_amount: int


T = TypeVar("T")


class IImageRepository(ITransactionalRepository):
    """Repository contract for image rows; scopes cross-owner transactions."""


class IOwnerEntityRepository(ITransactionalRepository, Generic[T]):
    """Typed repository contract for a single catalog kind."""

    @abstractmethod
    def get_with_unpublished(self, id: str, lock: bool = False) -> Optional[T]:
        """Retrieve a published or unpublished (but not soft-deleted) record.

        ``lock=True`` takes a row-level lock (SELECT FOR UPDATE) and must be
        called inside a transaction.  Returns ``None`` when missing.
        """

    @abstractmethod
    def list_with_unpublished_by_ids(
        self, ids: Sequence[str], lock: bool = False
    ) -> List[T]:
        """Retrieve every non-deleted record whose ID is in ``ids``."""

    @abstractmethod
    def add_image(self, entity: T, image: Image) -> None:
        """Attach a copy of ``image`` to ``entity``."""

    @abstractmethod
    def add_image_batch(self, entities: Sequence[T], image: Image) -> None:
        """Attach a copy of ``image`` to each of ``entities``."""

    @abstractmethod
    def delete_image(self, entity: T, media_service_id: str) -> int:
        """Detach the image from ``entity``; returns removed associations."""

    @abstractmethod
    def delete_image_batch(self, entities: Sequence[T], image: Image) -> int:
        """Detach ``image`` from each of ``entities``; returns removed associations."""

    @abstractmethod
    def batch_update(self, entities: Sequence[T], field: BatchUpdateField) -> int:
        """Persist ``field`` of every entity in one statement; returns matched rows."""

    @abstractmethod
    def find_owner_ids_by_image_id(
        self, media_service_id: str, owner_ids: Sequence[str]
    ) -> List[str]:
        """Return the subset of ``owner_ids`` holding the given image."""

    @abstractmethod
    def decrement_image_count(self, owner_ids: Sequence[str]) -> int:
        """Atomically decrement ``uploaded_image_amount``; returns updated rows."""


class IImageOwnerRepository(IOwnerEntityRepository[ImageOwner]):
    """Entity-agnostic owner capability set used by ``ImageOwnershipService``.

    Implementations convert ``ImageOwner`` values back to their concrete
    model and raise ``IncorrectOwnerType`` on a mismatch.
    """
