"""Scan progress over one ScanBuffer instance."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass
class Cursor:
    """Offsets into the current scan buffer.

    ``pos`` is the next unscanned byte. ``[token_start, token_end)`` bounds
    the token being delivered, of which ``token_read_offset`` bytes have
    already been handed out. ``token_start == token_end`` means no token is
    active.
    """

    pos: int = 0
    token_start: int = 0
    token_end: int = 0
    token_read_offset: int = 0

    @property
    def active(self) -> bool:
        return self.token_start < self.token_end

    @property
    def remaining(self) -> int:
        return (self.token_end - self.token_start) - self.token_read_offset

    def reset(self) -> None:
        self.pos = 0
        self.token_start = 0
        self.token_end = 0
        self.token_read_offset = 0

    def finish_token(self) -> None:
        """Leave the active token and park ``pos`` right after it."""
        self.pos = self.token_end
        self.token_start = 0
        self.token_end = 0
        self.token_read_offset = 0

    def copy(self) -> "Cursor":
        return replace(self)

    def commit(self, draft: "Cursor") -> None:
        """Adopt every offset from ``draft``."""
        self.pos = draft.pos
        self.token_start = draft.token_start
        self.token_end = draft.token_end
        self.token_read_offset = draft.token_read_offset
