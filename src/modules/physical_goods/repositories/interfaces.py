"""Physical good repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.images.repositories.interfaces import IOwnerEntityRepository

if TYPE_CHECKING:
    from modules.physical_goods.models import PhysicalGood


class IPhysicalGoodRepository(IOwnerEntityRepository["PhysicalGood"]):
    """Data access contract for physical goods."""
