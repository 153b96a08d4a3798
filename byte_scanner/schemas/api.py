import base64
import binascii
from typing import Literal

from pydantic import BaseModel, Field, field_validator


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class OpenResponse(BaseModel):
    session_id: str


class ControlRequest(BaseModel):
    request: int = Field(
        default=0,
        examples=[0],
        description="Control request code; 0 makes the next write set the separators",
    )


class WriteRequest(BaseModel):
    data: bytes = Field(
        examples=["aGVsbG86d29ybGQ="],
        description="Base64-encoded bytes to install as scan buffer or separator set",
    )

    @field_validator("data", mode="before")
    @classmethod
    def decode_base64(cls, value):
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"data is not valid base64: {e}") from e
        return value


class WriteResponse(BaseModel):
    written: int


class ReadRequest(BaseModel):
    capacity: int | None = Field(
        default=None,
        ge=0,
        description="Largest chunk the caller accepts; defaults to the service setting",
    )


class ReadResponse(BaseModel):
    outcome: Literal["chunk", "token_boundary", "no_more_data"]
    data: str = Field(default="", description="Base64-encoded chunk bytes")
    length: int = 0
    progress: bool = False


class SessionStateResponse(BaseModel):
    session_id: str
    awaiting_separator_write: bool
    separators: str = Field(description="Base64-encoded separator bytes")
    buffer_length: int | None = None
    position: int
