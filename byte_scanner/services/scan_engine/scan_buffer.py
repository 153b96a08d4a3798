"""The byte payload currently being tokenized."""

from __future__ import annotations


class ScanBuffer:
    """Immutable, length-delimited byte blob installed by a data write.

    No byte is treated as a terminator; embedded NUL is ordinary content.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> int:
        return self._data[index]

    def __bytes__(self) -> bytes:
        return self._data

    def slice(self, start: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``start``."""
        return self._data[start : start + length]

    def __repr__(self) -> str:
        return f"ScanBuffer(len={len(self._data)})"
