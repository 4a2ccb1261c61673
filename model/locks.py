"""Non-blocking, per-session exclusive locks."""
from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator, NamedTuple

from commands.errors import LockUnavailable
from model.session import GameSessionKey

logger = logging.getLogger('discord')


class SessionLock(NamedTuple):
    """Ownership token over one game session."""
    key: GameSessionKey
    token: str


class LockCoordinator:
    """Hands out at most one SessionLock per GameSessionKey at a time.

    Acquisition never waits: a contended key raises LockUnavailable immediately.
    """

    def try_acquire(self, key: GameSessionKey) -> SessionLock:
        raise NotImplementedError

    def release(self, lock: SessionLock) -> bool:
        raise NotImplementedError

    def is_locked(self, key: GameSessionKey) -> bool:
        raise NotImplementedError

    @contextmanager
    def hold(self, key: GameSessionKey) -> Iterator[SessionLock]:
        """Acquire ``key`` for the duration of the block; released on every exit path."""
        lock = self.try_acquire(key)
        try:
            yield lock
        finally:
            self.release(lock)


class InMemoryLockCoordinator(LockCoordinator):
    """Lock table for a single bot process."""

    def __init__(self):
        self._guard = threading.Lock()
        self._held: dict[GameSessionKey, str] = {}

    def try_acquire(self, key: GameSessionKey) -> SessionLock:
        with self._guard:
            if key in self._held:
                raise LockUnavailable()
            token = uuid.uuid4().hex
            self._held[key] = token
        return SessionLock(key, token)

    def release(self, lock: SessionLock) -> bool:
        with self._guard:
            if self._held.get(lock.key) != lock.token:
                logger.warning(f"Tried to release a session lock that isn't held: {lock.key}")
                return False
            del self._held[lock.key]
        return True

    def is_locked(self, key: GameSessionKey) -> bool:
        with self._guard:
            return key in self._held
