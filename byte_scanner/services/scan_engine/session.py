"""Per-connection scanner state and the operations acting on it."""

from __future__ import annotations

import logging
from typing import Iterator

from .cursor import Cursor
from .defaults import ServiceDefaults
from .engine import Deliver, ScanEngine
from .errors import InvalidRequest, ResourceExhausted
from .outcomes import Chunk, NoMoreData, ReadOutcome, TokenBoundary
from .scan_buffer import ScanBuffer
from .separators import SeparatorSet

CONFIGURE_REQUEST = 0


class Session:
    """One open connection: a scan buffer, its separators and a cursor.

    A session is not safe for concurrent use; callers sharing one must
    serialize access (see ``SessionRegistry.checkout``).
    """

    def __init__(
        self,
        logger: logging.Logger,
        defaults: ServiceDefaults | None = None,
        max_write_size: int | None = None,
    ) -> None:
        self.logger = logger
        self.engine = ScanEngine(logger)
        self.max_write_size = max_write_size
        self.separators: SeparatorSet = (defaults or ServiceDefaults()).separator_set()
        self.buffer: ScanBuffer | None = None
        self.cursor = Cursor()
        self.awaiting_separator_write = False
        self.closed = False

    def control(self, request: int) -> None:
        """Dispatch a control request; only ``CONFIGURE_REQUEST`` exists."""
        if request != CONFIGURE_REQUEST:
            self.logger.warning("Rejected control request %r", request)
            raise InvalidRequest(request)
        self.enter_config_mode()

    def enter_config_mode(self) -> None:
        """Make the next write replace the separator set.

        The current separators are dropped right away, so until that write
        lands the session has no separators at all.
        """
        self.awaiting_separator_write = True
        self.separators = SeparatorSet.empty()
        self.logger.debug("Configuration mode entered")

    def write(self, data: bytes) -> int:
        """Replace either the separator set or the scan buffer with ``data``."""
        if self.max_write_size is not None and len(data) > self.max_write_size:
            raise ResourceExhausted(
                f"Write of {len(data)} bytes exceeds the {self.max_write_size} byte limit"
            )
        try:
            if self.awaiting_separator_write:
                self.separators = SeparatorSet(data)
                self.awaiting_separator_write = False
                self.logger.info("Separator set replaced (%d bytes)", len(data))
            else:
                self.buffer = None
                self.buffer = ScanBuffer(data)
                self.cursor.reset()
                self.logger.debug("Scan buffer replaced (%d bytes)", len(data))
        except MemoryError as e:
            raise ResourceExhausted(f"Cannot store {len(data)} bytes") from e
        return len(data)

    def read(self, capacity: int, deliver: Deliver | None = None) -> ReadOutcome:
        return self.engine.read(
            self.buffer, self.separators, self.cursor, capacity, deliver
        )

    def tokens(self, capacity: int = 128) -> Iterator[bytes]:
        """Drain the buffer, yielding each token reassembled from its chunks."""
        if capacity < 1:
            raise ValueError("capacity must be at least 1 to make progress")
        parts: list[bytes] = []
        while True:
            outcome = self.read(capacity)
            if isinstance(outcome, Chunk):
                parts.append(outcome.data)
            elif isinstance(outcome, TokenBoundary):
                yield b"".join(parts)
                parts = []
            elif isinstance(outcome, NoMoreData):
                return

    def close(self) -> None:
        self.buffer = None
        self.separators = SeparatorSet.empty()
        self.cursor.reset()
        self.closed = True
