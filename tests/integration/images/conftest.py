from __future__ import annotations

from decimal import Decimal

import pytest

from modules.courses.models import Course
from modules.physical_goods.models import PhysicalGood
from modules.seminars.models import Seminar
from modules.training_sessions.models import TrainingSession


def create_owner(owner_type: str, **overrides):
    """Persist one catalog item of the given kind."""
    factories = {
        "physical_good": lambda: PhysicalGood(name="Widget", price=Decimal("9.90")),
        "seminar": lambda: Seminar(name="Django Deep Dive", place="Room 1"),
        "course": lambda: Course(name="Python Basics", topic="python"),
        "training_session": lambda: TrainingSession(name="Pair session"),
    }
    owner = factories[owner_type]()
    for field, value in overrides.items():
        setattr(owner, field, value)
    owner.save()
    return owner


@pytest.fixture()
def make_owner():
    return create_owner
