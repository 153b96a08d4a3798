"""Tagged results of a single read call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Chunk:
    """More bytes of the current token.

    A zero-capacity read yields ``Chunk(b"", progress=False)``: nothing was
    delivered and the caller must retry with a positive capacity.
    """

    data: bytes
    progress: bool = True

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class TokenBoundary:
    """The current token has been fully delivered."""


@dataclass(frozen=True)
class NoMoreData:
    """The buffer is exhausted, empty, or was never written."""


ReadOutcome = Union[Chunk, TokenBoundary, NoMoreData]

TOKEN_BOUNDARY = TokenBoundary()
NO_MORE_DATA = NoMoreData()
