"""Arena of open sessions reached through opaque handles."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .defaults import ServiceDefaults
from .errors import InvalidHandle, ResourceExhausted
from .session import Session


@dataclass
class _Slot:
    session: Session
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionRegistry:
    """Maps session ids to sessions, each guarded by its own lock.

    Ids are random and never reused, so a stale id can only ever fail
    with ``InvalidHandle``.
    """

    def __init__(
        self,
        logger: logging.Logger,
        defaults: ServiceDefaults | None = None,
        max_sessions: int | None = None,
        max_write_size: int | None = None,
    ) -> None:
        self.logger = logger
        self.defaults = defaults or ServiceDefaults()
        self.max_sessions = max_sessions
        self.max_write_size = max_write_size
        self._slots: dict[str, _Slot] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._slots

    def open(self) -> str:
        with self._lock:
            if self.max_sessions is not None and len(self._slots) >= self.max_sessions:
                self.logger.warning(
                    "Session limit of %d reached; refusing open", self.max_sessions
                )
                raise ResourceExhausted(
                    f"Session limit of {self.max_sessions} reached"
                )
            session_id = uuid.uuid4().hex
            self._slots[session_id] = _Slot(
                Session(self.logger, self.defaults, self.max_write_size)
            )
        self.logger.info("Session %s opened", session_id)
        return session_id

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[Session]:
        """Hold the session's lock for the duration of the block."""
        slot = self._slot(session_id)
        with slot.lock:
            if slot.session.closed:
                raise InvalidHandle(session_id)
            yield slot.session

    def close(self, session_id: str) -> None:
        with self._lock:
            slot = self._slots.pop(session_id, None)
        if slot is None:
            raise InvalidHandle(session_id)
        with slot.lock:
            slot.session.close()
        self.logger.info("Session %s closed", session_id)

    def _slot(self, session_id: str) -> _Slot:
        with self._lock:
            slot = self._slots.get(session_id)
        if slot is None:
            raise InvalidHandle(session_id)
        return slot
