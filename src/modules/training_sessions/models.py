"""Training session model."""

from __future__ import annotations

from django.db import models

from modules.core.models import CatalogItemModel


class TrainingFormat(models.TextChoices):
    ONLINE = "online", "Online"
    OFFLINE = "offline", "Offline"


class TrainingSession(CatalogItemModel):
    """One-to-one or group training slot."""

    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    duration_minutes = models.PositiveIntegerField(default=60)
    format = models.CharField(
        max_length=20,
        choices=TrainingFormat.choices,
        default=TrainingFormat.ONLINE,
    )

    class Meta(CatalogItemModel.Meta):
        db_table = "training_sessions"
