"""Transactional repository contract (Dependency Inversion Principle).

Provides ``ITransactionalRepository``, the base abstract class that every
repository taking part in a multi-step unit of work extends.  Service-layer
code opens transactions through this abstraction, never through
``django.db.transaction`` on a hard-coded alias.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import TypeVar

R = TypeVar("R", bound="ITransactionalRepository")


class ITransactionalRepository(ABC):
    """Base contract for repositories bound to a database alias."""

    @property
    @abstractmethod
    def db_alias(self) -> str:
        """Database alias the repository reads and writes through."""

    @abstractmethod
    def using(self: R, alias: str) -> R:
        """Return a copy of the repository bound to ``alias``."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Open (or join) a transaction on the bound alias.

        Leaving the block with an exception rolls the transaction back.
        """
