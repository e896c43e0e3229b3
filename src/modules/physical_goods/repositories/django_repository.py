"""Django ORM implementation of the PhysicalGood repository."""

from __future__ import annotations

from modules.images.repositories.django_repository import OwnerEntityDjangoRepository
from modules.physical_goods.models import PhysicalGood
from modules.physical_goods.repositories.interfaces import IPhysicalGoodRepository


class PhysicalGoodDjangoRepository(
    OwnerEntityDjangoRepository[PhysicalGood], IPhysicalGoodRepository
):
    """Concrete PhysicalGood repository backed by Django ORM."""

    model = PhysicalGood
