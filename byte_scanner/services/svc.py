from __future__ import annotations

from byte_scanner.schemas.api import ReadResponse, SessionStateResponse, encode_bytes
from byte_scanner.services.scan_engine.outcomes import Chunk, TokenBoundary
from byte_scanner.services.scan_engine.registry import SessionRegistry


def open_session(registry: SessionRegistry) -> str:
    """Create a session seeded with the service defaults."""
    return registry.open()


def session_state(registry: SessionRegistry, session_id: str) -> SessionStateResponse:
    with registry.checkout(session_id) as session:
        return SessionStateResponse(
            session_id=session_id,
            awaiting_separator_write=session.awaiting_separator_write,
            separators=encode_bytes(bytes(session.separators)),
            buffer_length=None if session.buffer is None else len(session.buffer),
            position=session.cursor.pos,
        )


def control(registry: SessionRegistry, session_id: str, request: int) -> SessionStateResponse:
    with registry.checkout(session_id) as session:
        session.control(request)
    return session_state(registry, session_id)


def write(registry: SessionRegistry, session_id: str, data: bytes) -> int:
    with registry.checkout(session_id) as session:
        return session.write(data)


def read(registry: SessionRegistry, session_id: str, capacity: int) -> ReadResponse:
    """Run one engine read and translate the outcome for the wire."""
    with registry.checkout(session_id) as session:
        outcome = session.read(capacity)
    if isinstance(outcome, Chunk):
        return ReadResponse(
            outcome="chunk",
            data=encode_bytes(outcome.data),
            length=len(outcome),
            progress=outcome.progress,
        )
    if isinstance(outcome, TokenBoundary):
        return ReadResponse(outcome="token_boundary")
    return ReadResponse(outcome="no_more_data")


def close_session(registry: SessionRegistry, session_id: str) -> None:
    registry.close(session_id)
