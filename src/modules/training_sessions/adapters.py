"""Image owner adapter for training sessions."""

from __future__ import annotations

from modules.images.adapters import OwnerRepositoryAdapter
from modules.training_sessions.models import TrainingSession


class TrainingSessionOwnerRepoAdapter(OwnerRepositoryAdapter):
    owner_model = TrainingSession
