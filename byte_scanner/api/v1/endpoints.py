import logging

from fastapi import APIRouter, Depends, Response, status

from byte_scanner.core.config import settings
from byte_scanner.schemas.api import (
    ControlRequest,
    OpenResponse,
    ReadRequest,
    ReadResponse,
    SessionStateResponse,
    WriteRequest,
    WriteResponse,
)
from byte_scanner.services import svc
from byte_scanner.services.scan_engine.defaults import ServiceDefaults
from byte_scanner.services.scan_engine.registry import SessionRegistry

logger = logging.getLogger("services")
router = APIRouter()

# Built once at startup; every session copies the defaults when it opens.
registry = SessionRegistry(
    logger,
    ServiceDefaults(separators=settings.default_separators),
    max_sessions=settings.max_sessions,
    max_write_size=settings.max_write_size,
)


def get_registry() -> SessionRegistry:
    """FastAPI dependency to provide the process-wide session registry."""
    return registry


@router.post("/sessions", response_model=OpenResponse, status_code=status.HTTP_201_CREATED)
def open_session(registry: SessionRegistry = Depends(get_registry)):
    return OpenResponse(session_id=svc.open_session(registry))


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
def session_state(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    return svc.session_state(registry, session_id)


@router.post("/sessions/{session_id}/control", response_model=SessionStateResponse)
def control(session_id: str, req: ControlRequest, registry: SessionRegistry = Depends(get_registry)):
    return svc.control(registry, session_id, req.request)


@router.post("/sessions/{session_id}/write", response_model=WriteResponse)
def write(session_id: str, req: WriteRequest, registry: SessionRegistry = Depends(get_registry)):
    return WriteResponse(written=svc.write(registry, session_id, req.data))


@router.post("/sessions/{session_id}/read", response_model=ReadResponse)
def read(
    session_id: str,
    req: ReadRequest | None = None,
    registry: SessionRegistry = Depends(get_registry),
):
    capacity = req.capacity if req and req.capacity is not None else settings.default_read_capacity
    return svc.read(registry, session_id, capacity)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    svc.close_session(registry, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
