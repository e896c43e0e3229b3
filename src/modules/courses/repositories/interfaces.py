"""Course repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.images.repositories.interfaces import IOwnerEntityRepository

if TYPE_CHECKING:
    from modules.courses.models import Course


class ICourseRepository(IOwnerEntityRepository["Course"]):
    """Data access contract for courses."""
