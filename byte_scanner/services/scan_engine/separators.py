"""Separator alphabet used to split a scan buffer into tokens."""

from __future__ import annotations

from typing import Iterator


class SeparatorSet:
    """Owned copy of separator bytes, queried only for membership.

    Order and duplicates carry no meaning. Any byte value, NUL included,
    may be a separator. An empty set matches nothing.
    """

    __slots__ = ("_raw", "_members")

    def __init__(self, raw: bytes = b"") -> None:
        self._raw = bytes(raw)
        self._members = frozenset(self._raw)

    @classmethod
    def empty(cls) -> "SeparatorSet":
        return cls(b"")

    def __contains__(self, byte: int) -> bool:
        return byte in self._members

    def __len__(self) -> int:
        return len(self._raw)

    def __iter__(self) -> Iterator[int]:
        return iter(self._raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeparatorSet):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"SeparatorSet({self._raw!r})"
