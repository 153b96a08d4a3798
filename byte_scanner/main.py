import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from byte_scanner.api.v1.endpoints import router as api_router
from byte_scanner.core.config import settings
from byte_scanner.services.scan_engine.errors import (
    InvalidHandle,
    InvalidRequest,
    ResourceExhausted,
    ScannerError,
)

logging.getLogger("services").setLevel(settings.log_level.upper())

_STATUS_BY_ERROR = {
    InvalidRequest: 400,
    InvalidHandle: 404,
    ResourceExhausted: 507,
}

app = FastAPI(title="byte-scanner")
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(ScannerError)
async def scanner_error_handler(request: Request, exc: ScannerError):
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {"status": "ok"}
