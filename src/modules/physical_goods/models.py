"""Physical good model.

Business rules implemented:
- Price must be greater than zero.
- Stock amount cannot be negative.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
- At most ``MAX_IMAGES_PER_OWNER`` images (inherited from CatalogItemModel).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import CatalogItemModel


class PhysicalGood(CatalogItemModel):
    """Tangible catalog item sold from stock."""

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    amount = models.PositiveIntegerField(default=0)
    shipping_required = models.BooleanField(default=True)

    class Meta(CatalogItemModel.Meta):
        db_table = "physical_goods"
        constraints = CatalogItemModel.Meta.constraints + [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="physical_goods_price_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})
