"""Django ORM implementation of the Course repository."""

from __future__ import annotations

from modules.courses.models import Course
from modules.courses.repositories.interfaces import ICourseRepository
from modules.images.repositories.django_repository import OwnerEntityDjangoRepository


class CourseDjangoRepository(OwnerEntityDjangoRepository[Course], ICourseRepository):
    """Concrete Course repository backed by Django ORM."""

    model = Course
