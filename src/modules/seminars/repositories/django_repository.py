"""Django ORM implementation of the Seminar repository."""

from __future__ import annotations

from modules.images.repositories.django_repository import OwnerEntityDjangoRepository
from modules.seminars.models import Seminar
from modules.seminars.repositories.interfaces import ISeminarRepository


class SeminarDjangoRepository(OwnerEntityDjangoRepository[Seminar], ISeminarRepository):
    """Concrete Seminar repository backed by Django ORM."""

    model = Seminar
