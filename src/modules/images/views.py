"""Image API views.

Exposes the ``ImageService`` via HTTP using a DRF ViewSet.  The owner
kind comes from the URL; the body carries the image and owner IDs.
Domain exceptions are caught and translated into HTTP status codes.
Unexpected database failures surface as a generic 500 without leaking
internals.
"""

from __future__ import annotations

from typing import Dict, Type

import structlog
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.courses.repositories.django_repository import CourseDjangoRepository
from modules.images.exceptions import (
    AssociationsNotFound,
    ImageLimitExceeded,
    ImageNotFoundOnOwner,
    ImageOwnershipError,
    InvalidArgument,
    OwnerNotFound,
    OwnersNotFound,
    UnknownOwnerType,
)
from modules.images.repositories.django_repository import ImageDjangoRepository
from modules.images.services import ImageOwnershipService, ImageService
from modules.physical_goods.repositories.django_repository import (
    PhysicalGoodDjangoRepository,
)
from modules.seminars.repositories.django_repository import SeminarDjangoRepository
from modules.training_sessions.repositories.django_repository import (
    TrainingSessionDjangoRepository,
)

logger = structlog.get_logger(__name__)

_ERROR_STATUS: Dict[Type[ImageOwnershipError], int] = {
    InvalidArgument: status.HTTP_400_BAD_REQUEST,
    UnknownOwnerType: status.HTTP_400_BAD_REQUEST,
    ImageLimitExceeded: status.HTTP_400_BAD_REQUEST,
    OwnerNotFound: status.HTTP_404_NOT_FOUND,
    OwnersNotFound: status.HTTP_404_NOT_FOUND,
    ImageNotFoundOnOwner: status.HTTP_404_NOT_FOUND,
    AssociationsNotFound: status.HTTP_404_NOT_FOUND,
}


def _error_response(exc: ImageOwnershipError) -> Response:
    code = _ERROR_STATUS.get(type(exc))
    if code is None:
        logger.error(
            "image.operation_failed",
            error_type=type(exc).__name__,
            error=str(exc),
            cause=repr(exc.__cause__),
        )
        return Response(
            {"detail": "Internal server error."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return Response({"detail": str(exc)}, status=code)


def build_image_service() -> ImageService:
    """Wire ``ImageService`` with the Django ORM repositories."""
    return ImageService(
        ownership_service=ImageOwnershipService(ImageDjangoRepository()),
        physical_good_repository=PhysicalGoodDjangoRepository(),
        seminar_repository=SeminarDjangoRepository(),
        course_repository=CourseDjangoRepository(),
        training_session_repository=TrainingSessionDjangoRepository(),
    )


class ImageViewSet(ViewSet):
    """Attach/detach images to catalog items of any supported kind.

    Authentication follows the project default (JWT, fail closed).  Bodies
    are JSON only, since batch requests carry an ``owner_ids`` list.
    """

    parser_classes = [JSONParser]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_image_service()

    # ------------------------------------------------------------------
    # Single owner
    # ------------------------------------------------------------------

    def add(self, request: Request, owner_type: str) -> Response:
        """POST /api/v1/images/{owner_type}/"""
        try:
            self._service.add(owner_type, request.data)
        except ImageOwnershipError as exc:
            return _error_response(exc)
        return Response(
            {
                "media_service_id": request.data.get("media_service_id"),
                "owner_id": request.data.get("owner_id"),
            },
            status=status.HTTP_201_CREATED,
        )

    def remove(self, request: Request, owner_type: str) -> Response:
        """POST /api/v1/images/{owner_type}/delete/"""
        try:
            self._service.delete(owner_type, request.data)
        except ImageOwnershipError as exc:
            return _error_response(exc)
        return Response(
            {
                "media_service_id": request.data.get("media_service_id"),
                "owner_id": request.data.get("owner_id"),
            }
        )

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def add_batch(self, request: Request, owner_type: str) -> Response:
        """POST /api/v1/images/{owner_type}/batch/"""
        try:
            affected = self._service.add_batch(owner_type, request.data)
        except ImageOwnershipError as exc:
            return _error_response(exc)
        return Response({"owners_affected": affected})

    def remove_batch(self, request: Request, owner_type: str) -> Response:
        """POST /api/v1/images/{owner_type}/batch/delete/"""
        try:
            affected = self._service.delete_batch(owner_type, request.data)
        except ImageOwnershipError as exc:
            return _error_response(exc)
        return Response({"owners_affected": affected})
