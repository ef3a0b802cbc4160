"""In-memory record storage for users and generation records.

The store is a plain object created once per application (see
:func:`stylecraft.api.main.create_app`) and handed to whoever needs it.
Nothing here survives a process restart.

Identifiers come from a single counter shared by both record kinds, so an id
is unique across users *and* generations.  The counter is advanced under a
lock, which keeps ids unique even when FastAPI runs handlers on its thread
pool.
"""

from __future__ import annotations

import itertools
import logging
import threading
from abc import ABC, abstractmethod

from stylecraft.core.schema import Generation, InsertGeneration, InsertUser, User

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """CRUD contract for user and generation records.

    Lookups return ``None`` for unknown ids; no method raises for a missing
    record.
    """

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Return the user with ``user_id``, or ``None``."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None:
        """Return the first user whose username matches, or ``None``."""

    @abstractmethod
    def create_user(self, data: InsertUser) -> User:
        """Assign an id to ``data``, store it, and return the stored user."""

    @abstractmethod
    def create_generation(self, data: InsertGeneration) -> Generation:
        """Assign an id to ``data``, store it, and return the stored record."""

    @abstractmethod
    def get_generation(self, generation_id: int) -> Generation | None:
        """Return the generation with ``generation_id``, or ``None``."""

    @abstractmethod
    def list_generations(self) -> list[Generation]:
        """Return every stored generation record."""


class MemoryStore(RecordStore):
    """Dictionary-backed :class:`RecordStore`.

    Records are pydantic models with ``frozen=True``, so the stored objects
    are returned directly without copying.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._generations: dict[int, Generation] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in list(self._users.values()) if u.username == username), None)

    def create_user(self, data: InsertUser) -> User:
        user = User(id=self._next_id(), **data.model_dump())
        self._users[user.id] = user
        logger.debug(f"Created user {user.id} ({user.username})")
        return user

    def create_generation(self, data: InsertGeneration) -> Generation:
        generation = Generation(id=self._next_id(), **data.model_dump())
        self._generations[generation.id] = generation
        logger.debug(f"Created generation {generation.id}")
        return generation

    def get_generation(self, generation_id: int) -> Generation | None:
        return self._generations.get(generation_id)

    def list_generations(self) -> list[Generation]:
        return list(self._generations.values())
