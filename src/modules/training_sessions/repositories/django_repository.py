"""Django ORM implementation of the TrainingSession repository."""

from __future__ import annotations

from modules.images.repositories.django_repository import OwnerEntityDjangoRepository
from modules.training_sessions.models import TrainingSession
from modules.training_sessions.repositories.interfaces import (
    ITrainingSessionRepository,
)


class TrainingSessionDjangoRepository(
    OwnerEntityDjangoRepository[TrainingSession], ITrainingSessionRepository
):
    """Concrete TrainingSession repository backed by Django ORM."""

    model = TrainingSession
