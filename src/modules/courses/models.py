"""Course model."""

from __future__ import annotations

from django.db import models

from modules.core.models import CatalogItemModel


class Course(CatalogItemModel):
    """Self-paced online course.

    ``access_duration`` is how long a buyer keeps access; ``None`` means
    unlimited access.
    """

    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    topic = models.CharField(max_length=255, blank=True, default="")
    access_duration = models.DurationField(null=True, blank=True)

    class Meta(CatalogItemModel.Meta):
        db_table = "courses"
