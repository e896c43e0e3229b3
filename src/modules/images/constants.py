"""Image ownership constants."""

from django.db import models

MAX_IMAGES_PER_OWNER = 5


class OwnerType(models.TextChoices):
    """Catalog entity kinds that can own images."""

    PHYSICAL_GOOD = "physical_good", "Physical good"
    SEMINAR = "seminar", "Seminar"
    COURSE = "course", "Course"
    TRAINING_SESSION = "training_session", "Training session"


class BatchUpdateField(models.TextChoices):
    """Owner columns that ``batch_update`` knows how to persist."""

    UPLOADED_IMAGE_AMOUNT = "uploaded_image_amount", "Uploaded image amount"
