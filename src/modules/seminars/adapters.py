"""Image owner adapter for seminars."""

from __future__ import annotations

from modules.images.adapters import OwnerRepositoryAdapter
from modules.seminars.models import Seminar


class SeminarOwnerRepoAdapter(OwnerRepositoryAdapter):
    owner_model = Seminar
