"""Image ownership service layer (Use Cases).

Generic business logic for attaching images to, and detaching them from,
any catalog kind.  The service never sees a concrete model: every call
receives an ``IImageOwnerRepository`` adapter for the owner kind at hand.

Business rules enforced here:
- An owner holds at most ``MAX_IMAGES_PER_OWNER`` images.
- ``uploaded_image_amount`` changes by exactly one per association
  actually created or removed, in the same transaction as the association.
- Batch operations only touch counters of owners whose associations
  really changed.

All database work for one call runs inside a single transaction; any
failure rolls back both the association rows and the counters.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterator,
    Mapping,
    Type,
    TypeVar,
    Union,
)

import structlog
from django.db import DatabaseError
from pydantic import ValidationError as PydanticValidationError

from modules.courses.adapters import CourseOwnerRepoAdapter
from modules.images.constants import MAX_IMAGES_PER_OWNER, BatchUpdateField, OwnerType
from modules.images.dtos import (
    AddImageBatchDTO,
    AddImageDTO,
    DeleteImageBatchDTO,
    DeleteImageDTO,
    ImageRequestDTO,
)
from modules.images.exceptions import (
    AssociationsNotFound,
    ImageLimitExceeded,
    ImageNotFoundOnOwner,
    ImageOperationFailed,
    InvalidArgument,
    OwnerNotFound,
    OwnersNotFound,
    UnknownOwnerType,
)
from modules.images.models import Image
from modules.physical_goods.adapters import PhysicalGoodOwnerRepoAdapter
from modules.seminars.adapters import SeminarOwnerRepoAdapter
from modules.training_sessions.adapters import TrainingSessionOwnerRepoAdapter

if TYPE_CHECKING:
    from modules.courses.repositories.django_repository import CourseDjangoRepository
    from modules.images.repositories.interfaces import (
        IImageOwnerRepository,
        IImageRepository,
    )
    from modules.physical_goods.repositories.django_repository import (
        PhysicalGoodDjangoRepository,
    )
    from modules.seminars.repositories.django_repository import SeminarDjangoRepository
    from modules.training_sessions.repositories.django_repository import (
        TrainingSessionDjangoRepository,
    )

logger = structlog.get_logger(__name__)

D = TypeVar("D", bound=ImageRequestDTO)

Payload = Union[ImageRequestDTO, Mapping[str, Any]]


def _validate(dto_class: Type[D], request: Payload) -> D:
    try:
        return dto_class.validate_request(request)
    except (PydanticValidationError, TypeError, ValueError) as exc:
        raise InvalidArgument(str(exc)) from exc


@contextmanager
def _db_step(message: str) -> Iterator[None]:
    """Translate database errors raised inside the block into ``ImageOperationFailed``."""
    try:
        yield
    except DatabaseError as exc:
        raise ImageOperationFailed(f"{message}: {exc}") from exc


def _new_image(dto: Union[AddImageDTO, AddImageBatchDTO]) -> Image:
    return Image(
        url=dto.url,
        secure_url=dto.secure_url,
        public_id=dto.public_id,
        media_service_id=dto.media_service_id,
    )


class ImageOwnershipService:
    """Application service for image/owner associations.

    Stateless: the owner repository is injected per call, the image
    repository only provides the transactional scope for batch calls.
    """

    def __init__(self, image_repository: IImageRepository) -> None:
        self._image_repo = image_repository

    # ------------------------------------------------------------------
    # Single owner
    # ------------------------------------------------------------------

    def add_image(self, request: Payload, owner_repo: IImageOwnerRepository) -> None:
        """Attach an image to one owner.

        The owner may be unpublished, so images can be attached before
        publication.  The owner row is locked for the duration of the
        transaction so concurrent calls cannot both pass the limit check.

        Raises:
            InvalidArgument: request payload is invalid.
            OwnerNotFound: owner does not exist.
            ImageLimitExceeded: owner already holds the maximum of images.
            ImageOperationFailed: a database step failed.
        """
        dto = _validate(AddImageDTO, request)
        log = logger.bind(
            owner_id=str(dto.owner_id), media_service_id=str(dto.media_service_id)
        )

        with _db_step("failed to add image for owner"), owner_repo.atomic():
            tx_repo = owner_repo.using(owner_repo.db_alias)

            with _db_step("failed to retrieve owner"):
                owner = tx_repo.get_with_unpublished(str(dto.owner_id), lock=True)
            if owner is None:
                raise OwnerNotFound(f"Owner {dto.owner_id} not found.")

            if owner.uploaded_image_amount >= MAX_IMAGES_PER_OWNER:
                log.warning(
                    "image.limit_exceeded",
                    uploaded_image_amount=owner.uploaded_image_amount,
                )
                raise ImageLimitExceeded(
                    f"Maximum number of uploaded images is "
                    f"{MAX_IMAGES_PER_OWNER} per item."
                )

            with _db_step("failed to add image for owner"):
                tx_repo.add_image(owner, _new_image(dto))

            owner.uploaded_image_amount += 1
            with _db_step("failed to update owner uploaded image count"):
                tx_repo.batch_update([owner], BatchUpdateField.UPLOADED_IMAGE_AMOUNT)

        log.info("image.added", uploaded_image_amount=owner.uploaded_image_amount)

    def delete_image(self, request: Payload, owner_repo: IImageOwnerRepository) -> None:
        """Detach an image from one owner.

        Raises:
            InvalidArgument: request payload is invalid.
            OwnerNotFound: owner does not exist.
            ImageNotFoundOnOwner: owner holds no image with that media service ID.
            ImageOperationFailed: a database step failed.
        """
        dto = _validate(DeleteImageDTO, request)
        log = logger.bind(
            owner_id=str(dto.owner_id), media_service_id=str(dto.media_service_id)
        )

        with _db_step("failed to delete image from owner"), owner_repo.atomic():
            tx_repo = owner_repo.using(owner_repo.db_alias)

            with _db_step("failed to retrieve owner"):
                owner = tx_repo.get_with_unpublished(str(dto.owner_id), lock=True)
            if owner is None:
                raise OwnerNotFound(f"Owner {dto.owner_id} not found.")

            with _db_step("failed to delete image from owner"):
                removed = tx_repo.delete_image(owner, str(dto.media_service_id))
            if not removed:
                log.warning("image.not_found_on_owner")
                raise ImageNotFoundOnOwner(
                    f"Image {dto.media_service_id} not found on owner {dto.owner_id}."
                )

            with _db_step("failed to decrement owner uploaded image count"):
                tx_repo.decrement_image_count([str(owner.id)])

        log.info("image.deleted")

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def add_image_batch(self, request: Payload, owner_repo: IImageOwnerRepository) -> int:
        """Attach one image to many owners; returns the number of owners affected.

        Owners already at the limit, or already holding the image, are
        skipped silently.  Only the remaining owners receive the association and the counter increment, so the
        counter always matches the stored associations.

        Raises:
            InvalidArgument: request payload is invalid.
            OwnersNotFound: none of the requested owners exist.
            ImageOperationFailed: a database step failed.
        """
        dto = _validate(AddImageBatchDTO, request)
        owner_ids = [str(owner_id) for owner_id in dto.owner_ids]
        log = logger.bind(
            media_service_id=str(dto.media_service_id), requested=len(owner_ids)
        )

        # Pre-filter outside the transaction; re-checked under lock below.
        with _db_step("failed to retrieve owners"):
            owners = owner_repo.list_with_unpublished_by_ids(owner_ids)
        if not owners:
            raise OwnersNotFound("None of the owners were found.")

        candidate_ids = [
            str(owner.id)
            for owner in owners
            if owner.uploaded_image_amount < MAX_IMAGES_PER_OWNER
        ]
        if not candidate_ids:
            log.info("image.batch_skipped", reason="all_owners_at_limit")
            return 0

        with _db_step("failed to batch add image"), self._image_repo.atomic():
            tx_repo = owner_repo.using(self._image_repo.db_alias)

            with _db_step("failed to lock owners"):
                locked = tx_repo.list_with_unpublished_by_ids(candidate_ids, lock=True)
            valid_owners = [
                owner
                for owner in locked
                if owner.uploaded_image_amount < MAX_IMAGES_PER_OWNER
            ]
            if not valid_owners:
                log.info("image.batch_skipped", reason="all_owners_at_limit")
                return 0

            with _db_step("failed to look up existing associations"):
                holders = set(
                    tx_repo.find_owner_ids_by_image_id(
                        str(dto.media_service_id),
                        [str(owner.id) for owner in valid_owners],
                    )
                )
            valid_owners = [
                owner for owner in valid_owners if str(owner.id) not in holders
            ]
            if not valid_owners:
                log.info("image.batch_skipped", reason="image_already_attached")
                return 0

            with _db_step("failed to batch add images for owners"):
                tx_repo.add_image_batch(valid_owners, _new_image(dto))

            for owner in valid_owners:
                owner.uploaded_image_amount += 1
            with _db_step("failed to batch update owners"):
                tx_repo.batch_update(
                    valid_owners, BatchUpdateField.UPLOADED_IMAGE_AMOUNT
                )

        log.info("image.batch_added", affected=len(valid_owners))
        return len(valid_owners)

    def delete_image_batch(
        self, request: Payload, owner_repo: IImageOwnerRepository
    ) -> int:
        """Detach one image from many owners; returns the number of owners affected.

        Only owners that really held the image have their counter decremented.

        Raises:
            InvalidArgument: request payload is invalid.
            OwnersNotFound: none of the requested owners exist.
            AssociationsNotFound: the owner/image association look-up failed.
            ImageOperationFailed: a database step failed.
        """
        dto = _validate(DeleteImageBatchDTO, request)
        media_service_id = str(dto.media_service_id)
        log = logger.bind(media_service_id=media_service_id)

        with _db_step("failed to batch delete image"), self._image_repo.atomic():
            tx_repo = owner_repo.using(self._image_repo.db_alias)

            with _db_step("failed to retrieve owners"):
                owners = tx_repo.list_with_unpublished_by_ids(
                    [str(owner_id) for owner_id in dto.owner_ids], lock=True
                )
            if not owners:
                raise OwnersNotFound("None of the owners were found.")

            try:
                affected_ids = tx_repo.find_owner_ids_by_image_id(
                    media_service_id, [str(owner.id) for owner in owners]
                )
            except DatabaseError as exc:
                raise AssociationsNotFound(
                    f"None of owners associated with image {media_service_id} found."
                ) from exc

            with _db_step("failed to batch delete image from owners"):
                tx_repo.delete_image_batch(
                    owners, Image(media_service_id=dto.media_service_id)
                )

            if affected_ids:
                with _db_step("failed to decrement uploaded image count from owners"):
                    tx_repo.decrement_image_count(affected_ids)

        log.info("image.batch_deleted", affected=len(affected_ids))
        return len(affected_ids)


class ImageService:
    """Routes image requests to ``ImageOwnershipService`` by owner type.

    Builds the owner adapter for the requested catalog kind on every call.
    """

    def __init__(
        self,
        ownership_service: ImageOwnershipService,
        physical_good_repository: PhysicalGoodDjangoRepository,
        seminar_repository: SeminarDjangoRepository,
        course_repository: CourseDjangoRepository,
        training_session_repository: TrainingSessionDjangoRepository,
    ) -> None:
        self._ownership = ownership_service
        self._adapter_factories: Dict[str, Callable[[], IImageOwnerRepository]] = {
            OwnerType.PHYSICAL_GOOD: lambda: PhysicalGoodOwnerRepoAdapter(
                physical_good_repository
            ),
            OwnerType.SEMINAR: lambda: SeminarOwnerRepoAdapter(seminar_repository),
            OwnerType.COURSE: lambda: CourseOwnerRepoAdapter(course_repository),
            OwnerType.TRAINING_SESSION: lambda: TrainingSessionOwnerRepoAdapter(
                training_session_repository
            ),
        }

    def _owner_repository(self, owner_type: str) -> IImageOwnerRepository:
        factory = self._adapter_factories.get(owner_type)
        if factory is None:
            raise UnknownOwnerType(f"Unknown owner type: {owner_type!r}.")
        return factory()

    def add(self, owner_type: str, request: Payload) -> None:
        self._ownership.add_image(request, self._owner_repository(owner_type))

    def delete(self, owner_type: str, request: Payload) -> None:
        self._ownership.delete_image(request, self._owner_repository(owner_type))

    def add_batch(self, owner_type: str, request: Payload) -> int:
        return self._ownership.add_image_batch(
            request, self._owner_repository(owner_type)
        )

    def delete_batch(self, owner_type: str, request: Payload) -> int:
        return self._ownership.delete_image_batch(
            request, self._owner_repository(owner_type)
        )
