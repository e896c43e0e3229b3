"""Seminar repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.images.repositories.interfaces import IOwnerEntityRepository

if TYPE_CHECKING:
    from modules.seminars.models import Seminar


class ISeminarRepository(IOwnerEntityRepository["Seminar"]):
    """Data access contract for seminars."""
