"""Image ownership exceptions.

Raised by the Service Layer when business rules are violated or a
database step fails.  The API layer (Views) catches these and translates
them into appropriate HTTP responses.

Database failures are chained (``raise ... from exc``) so the original
error stays reachable through ``__cause__``.
"""

from __future__ import annotations


class ImageOwnershipError(Exception):
    """Base class for every image ownership failure."""


class InvalidArgument(ImageOwnershipError):
    """The request payload failed validation."""


class UnknownOwnerType(ImageOwnershipError):
    """The owner type is not one of the supported catalog kinds."""


class IncorrectOwnerType(ImageOwnershipError):
    """An adapter received an owner of a different catalog kind."""


class OwnerNotFound(ImageOwnershipError):
    """The target owner does not exist or has been soft-deleted."""


class OwnersNotFound(ImageOwnershipError):
    """None of the owners requested by a batch operation exist."""


class ImageLimitExceeded(ImageOwnershipError):
    """The owner already holds the maximum number of images."""


class ImageNotFoundOnOwner(ImageOwnershipError):
    """The owner holds no image with the given media service ID."""


class AssociationsNotFound(ImageOwnershipError):
    """Owner/image associations could not be looked up for a batch delete."""


class ImageOperationFailed(ImageOwnershipError):
    """A database step failed; the transaction was rolled back."""
