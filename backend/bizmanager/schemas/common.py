"""
Business Manager Backend — Shared Pydantic Schemas
==================================================

What:  Base classes and envelopes shared by every resource's API contract.

Naming on the wire:
    - Request bodies and computed summaries use camelCase (`CamelModel`)
    - Stored entity rows are returned with their snake_case column names
      (`RowModel`), nested user references use `_id` / `firstName` style
"""

from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case names also accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RowModel(BaseModel):
    """Serializes an ORM row with its column names."""

    model_config = ConfigDict(from_attributes=True)


def wire_field(name: str, wire_name: str, **kwargs: Any) -> Any:
    """
    A field emitted as `wire_name`.

    It validates from either spelling because FastAPI re-validates the
    by-alias dump of every response model.
    """
    return Field(
        validation_alias=AliasChoices(name, wire_name),
        serialization_alias=wire_name,
        **kwargs,
    )


class DataResponse(BaseModel, Generic[T]):
    """The `{"data": ...}` envelope used by list and summary endpoints."""

    data: T


class MessageResponse(BaseModel):
    message: str


class IdRef(BaseModel):
    id: str


class UserRef(BaseModel):
    """Compact reference to a user embedded in other resources."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    first_name: str = wire_field("first_name", "firstName")
    last_name: str = wire_field("last_name", "lastName")
    shop_name: Optional[str] = wire_field("shop_name", "shopName", default=None)


class StaffRef(BaseModel):
    """User reference carrying the role, used by staff pickers."""

    model_config = ConfigDict(from_attributes=True)

    id: str = wire_field("id", "_id")
    first_name: str = wire_field("first_name", "firstName")
    last_name: str = wire_field("last_name", "lastName")
    role: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        message: Human-readable description for display to users
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: ok, degraded")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    timestamp: datetime = Field(description="Server time (UTC)")
    uptime_seconds: float = Field(description="Seconds since service started")
