"""
GameShelf Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for the game endpoints.
How:   FastAPI validates request bodies against the request models and
       serializes ORM objects through the response models.

Request models declare every field Optional. Presence checking happens in
GameService so that a missing field produces the fixed `{"error": ...}`
messages instead of FastAPI's default field-level 422 payload.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _coerce_identifier(value: Any) -> Any:
    # Anything that is not already a string is stringified; parse_game_id
    # then reports it as an unknown game like any other malformed id
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _coerce_text(value: Any) -> Any:
    # JSON numbers and booleans are stored as their text form
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class GameCreate(BaseModel):
    """Body of POST /api/game/create."""
    title: Optional[str] = Field(default=None, description="Game title")
    date: Optional[str] = Field(default=None, description="Release date, free-form text")
    genre: Optional[str] = Field(default=None, description="Genre")

    @field_validator("title", "date", "genre", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _coerce_text(v)


class GameUpdate(BaseModel):
    """Body of PUT /api/game/update. Only the title can change."""
    id: Optional[str] = Field(default=None, description="Identifier of the game to update")
    title: Optional[str] = Field(default=None, description="New title")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return _coerce_identifier(v)

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> Any:
        return _coerce_text(v)


class GameDestroy(BaseModel):
    """Optional body of DELETE /api/game/destroy/, used when the path has no id."""
    id: Optional[str] = Field(default=None, description="Identifier of the game to delete")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return _coerce_identifier(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class GameResponse(BaseModel):
    """
    What:  Full representation of a stored game.
    Who:   Returned by create, update and delete; items of the list response.
    """
    id: uuid.UUID = Field(description="System-generated identifier")
    title: str = Field(description="Game title")
    date: str = Field(description="Release date, free-form text")
    genre: str = Field(description="Genre")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Standard error response format for every 422 and 500.

    Example:
        {"error": "Cannot find game by that id", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error message")
    request_id: Optional[str] = Field(
        default=None,
        description="Request ID for support correlation"
    )


class HealthResponse(BaseModel):
    """Health check response returned by GET /health."""
    status: str = Field(description="Overall status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store status: connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the service started")
