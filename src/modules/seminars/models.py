"""Seminar model.

A seminar takes place at a given ``place`` between ``date`` and
``ending_date``.  ``ending_date`` must not precede ``date``.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import CatalogItemModel


class Seminar(CatalogItemModel):
    """Scheduled, in-person catalog event."""

    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    place = models.CharField(max_length=255, blank=True, default="")
    date = models.DateTimeField(null=True, blank=True)
    ending_date = models.DateTimeField(null=True, blank=True)

    class Meta(CatalogItemModel.Meta):
        db_table = "seminars"

    def clean(self) -> None:
        super().clean()
        if self.date and self.ending_date and self.ending_date < self.date:
            raise ValidationError(
                {"ending_date": "Ending date cannot precede the start date."}
            )
