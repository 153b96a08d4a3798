"""Incremental tokenizer driving a Cursor over a ScanBuffer."""

from __future__ import annotations

import logging
from typing import Callable

from .cursor import Cursor
from .outcomes import NO_MORE_DATA, TOKEN_BOUNDARY, Chunk, ReadOutcome
from .scan_buffer import ScanBuffer
from .separators import SeparatorSet

Deliver = Callable[[bytes], None]


class ScanEngine:
    """Produces the next chunk of a tokenized buffer, one read at a time.

    A read either continues the active token (bounded by ``capacity``),
    reports that the active token is complete, or scans forward for the
    next token. All work happens on a draft cursor which is committed only
    after ``deliver`` has accepted the bytes, so a failing transport never
    moves the scan position past what the caller actually received.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def read(
        self,
        buffer: ScanBuffer | None,
        separators: SeparatorSet,
        cursor: Cursor,
        capacity: int,
        deliver: Deliver | None = None,
    ) -> ReadOutcome:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        if buffer is None or len(buffer) == 0:
            return NO_MORE_DATA

        draft = cursor.copy()
        if not draft.active:
            if not self._locate_token(buffer, separators, draft):
                cursor.commit(draft)
                return NO_MORE_DATA
            self.logger.debug(
                "Token located at [%d, %d)", draft.token_start, draft.token_end
            )

        remaining = draft.remaining
        if remaining == 0:
            draft.finish_token()
            cursor.commit(draft)
            return TOKEN_BOUNDARY

        size = min(remaining, capacity)
        data = buffer.slice(draft.token_start + draft.token_read_offset, size)
        if size and deliver is not None:
            deliver(data)
        draft.token_read_offset += size
        cursor.commit(draft)
        self.logger.debug("Delivered %d of %d remaining token bytes", size, remaining)
        return Chunk(data, progress=size > 0)

    @staticmethod
    def _locate_token(
        buffer: ScanBuffer, separators: SeparatorSet, cursor: Cursor
    ) -> bool:
        """Advance ``cursor`` onto the next token; False when none is left."""
        end = len(buffer)
        pos = cursor.pos
        while pos < end and buffer[pos] in separators:
            pos += 1
        cursor.pos = pos
        if pos >= end:
            return False

        start = pos
        while pos < end and buffer[pos] not in separators:
            pos += 1
        cursor.token_start = start
        cursor.token_end = pos
        cursor.token_read_offset = 0
        cursor.pos = pos
        return True
