"""Image owner adapter for physical goods."""

from __future__ import annotations

from modules.images.adapters import OwnerRepositoryAdapter
from modules.physical_goods.models import PhysicalGood


class PhysicalGoodOwnerRepoAdapter(OwnerRepositoryAdapter):
    """Exposes ``PhysicalGoodDjangoRepository`` as an ``IImageOwnerRepository``."""

    owner_model = PhysicalGood
