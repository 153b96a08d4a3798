"""Exceptions raised by the scan engine and its session bookkeeping."""

from __future__ import annotations


class ScannerError(Exception):
    """Base class for every error the scanner reports to its caller."""


class ResourceExhausted(ScannerError):
    """Storage for a session, buffer or separator set could not be obtained."""


class InvalidRequest(ScannerError):
    """An unsupported control request was issued."""

    def __init__(self, request: int) -> None:
        super().__init__(f"Unsupported control request: {request}")
        self.request = request


class InvalidHandle(ScannerError):
    """The session handle is unknown or has already been closed."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"No open session with id {session_id!r}")
        self.session_id = session_id
