"""
Pydantic schemas for model records.

A model record is immutable once created: it carries a
server‑assigned ``id`` and ``create_time`` plus the caller‑supplied
``name``, ``version`` and ``data``.  ``data`` travels as text on the
wire and is stored as bytes.
"""

from pydantic import BaseModel, Field, field_validator


def _require_utf8(value: str) -> str:
    # JSON allows lone surrogate escapes such as "\ud800"; they decode to a
    # Python str but cannot be encoded for storage.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError("must be valid UTF-8 text") from exc
    return value


class ModelCreate(BaseModel):
    """Schema for creating a new model record."""

    name: str = Field(..., description="Caller supplied label")
    version: str = Field(..., description="Caller supplied version string")
    data: str = Field(..., description="Opaque payload, stored as UTF-8 bytes")

    @field_validator("name", "version", "data")
    @classmethod
    def validate_utf8(cls, v: str) -> str:
        return _require_utf8(v)


class ModelDelete(BaseModel):
    """Schema for deleting a model record by ID."""

    id: str

    @field_validator("id")
    @classmethod
    def validate_utf8(cls, v: str) -> str:
        return _require_utf8(v)


class ModelRead(BaseModel):
    """Schema for reading a model record."""

    id: str
    name: str
    version: str
    data: str
    create_time: int = Field(..., description="Milliseconds since the Unix epoch")
