"""Training session repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.images.repositories.interfaces import IOwnerEntityRepository

if TYPE_CHECKING:
    from modules.training_sessions.models import TrainingSession


class ITrainingSessionRepository(IOwnerEntityRepository["TrainingSession"]):
    """Data access contract for training sessions."""
