"""File-like access to a scanner session using the historical read codes.

``readinto`` reports a chunk as its positive length, the end of a token as
``0`` and exhaustion as ``-1``; errors surface as ``OSError`` with the
errno the character device used.
"""

from __future__ import annotations

import errno
import logging

from byte_scanner.core.config import DEVICE_NAME, settings
from byte_scanner.services.scan_engine.defaults import ServiceDefaults
from byte_scanner.services.scan_engine.errors import InvalidRequest, ResourceExhausted
from byte_scanner.services.scan_engine.outcomes import Chunk, TokenBoundary
from byte_scanner.services.scan_engine.session import Session

END_OF_TOKEN = 0
END_OF_DATA = -1


class ScannerDevice:
    """One open handle on the scanner, backed by a private Session."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        defaults: ServiceDefaults | None = None,
        max_write_size: int | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger(DEVICE_NAME)
        self._session = Session(self.logger, defaults, max_write_size)

    @property
    def closed(self) -> bool:
        return self._session.closed

    def ioctl(self, request: int) -> int:
        self._check_open()
        try:
            self._session.control(request)
        except InvalidRequest as e:
            raise OSError(errno.EINVAL, str(e)) from e
        return 0

    def write(self, data: bytes) -> int:
        self._check_open()
        try:
            return self._session.write(bytes(data))
        except ResourceExhausted as e:
            raise OSError(errno.ENOMEM, str(e)) from e

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Copy the next chunk into ``buffer`` and return the read code."""
        self._check_open()
        view = memoryview(buffer).cast("B")

        def deliver(chunk: bytes) -> None:
            view[: len(chunk)] = chunk

        outcome = self._session.read(len(view), deliver)
        if isinstance(outcome, Chunk):
            return len(outcome)
        if isinstance(outcome, TokenBoundary):
            return END_OF_TOKEN
        return END_OF_DATA

    def read(self, size: int = 128) -> bytes | int:
        """Return chunk bytes, or the ``END_OF_TOKEN``/``END_OF_DATA`` code."""
        buf = bytearray(size)
        n = self.readinto(buf)
        if n > 0:
            return bytes(buf[:n])
        return n

    def close(self) -> None:
        if not self._session.closed:
            self._session.close()

    def __enter__(self) -> "ScannerDevice":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._session.closed:
            raise ValueError("I/O operation on closed device")


def open_device(logger: logging.Logger | None = None) -> ScannerDevice:
    """Open a handle seeded with the configured separator template."""
    return ScannerDevice(
        logger,
        ServiceDefaults(separators=settings.default_separators),
        max_write_size=settings.max_write_size,
    )
