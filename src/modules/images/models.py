"""Image model.

An ``Image`` row is one association between an uploaded media asset and
a single owner.  Owners are polymorphic (physical goods, seminars,
courses, training sessions) and referenced through the contenttypes
framework: ``owner_type`` + ``owner_id``.

``media_service_id`` is the identifier issued by the external media
service.  It is the stable key used for look-ups and deletes; the same
asset attached to several owners yields several rows sharing it.
"""

from __future__ import annotations

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models

from modules.core.models import BaseModel


class Image(BaseModel):
    """Media asset reference owned by one catalog item."""

    url = models.URLField(max_length=2048)
    secure_url = models.URLField(max_length=2048)
    public_id = models.CharField(max_length=255)
    media_service_id = models.UUIDField(db_index=True)
    owner_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    owner_id = models.UUIDField()
    owner = GenericForeignKey("owner_type", "owner_id")

    class Meta:
        db_table = "images"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["owner_type", "owner_id"], name="images_owner_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["owner_type", "owner_id", "media_service_id"],
                name="images_owner_media_unique",
            ),
        ]

    def copy_for(self, owner: models.Model) -> Image:
        """Return an unsaved copy of this image attached to ``owner``."""
        return Image(
            url=self.url,
            secure_url=self.secure_url,
            public_id=self.public_id,
            media_service_id=self.media_service_id,
            owner=owner,
        )

    def __str__(self) -> str:
        return f"{self.media_service_id} -> {self.owner_type_id}:{self.owner_id}"
