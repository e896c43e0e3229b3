"""Image owner adapter for courses."""

from __future__ import annotations

from modules.courses.models import Course
from modules.images.adapters import OwnerRepositoryAdapter


class CourseOwnerRepoAdapter(OwnerRepositoryAdapter):
    owner_model = Course
