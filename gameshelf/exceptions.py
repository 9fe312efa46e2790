"""
GameShelf Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the game API's error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` JSON responses with the right status.
Who:   Raised by GameService and the Database handle; caught by global handlers.

Exception Hierarchy:
    GameShelfError (base)
    ├── ValidationError   → 422 Unprocessable Entity (missing fields / id)
    ├── NotFoundError     → 422 Unprocessable Entity (id does not resolve)
    └── DatabaseError     → 500 Internal Server Error

Both client-side errors use 422. Malformed identifiers and well-formed but
absent identifiers both raise NotFoundError with the same message.
"""

from typing import Any, Dict, Optional


# Client-facing messages, asserted literally by API consumers
MISSING_GAME_FIELDS = "Must provide a title, date && genre"
MISSING_UPDATE_FIELDS = "Must Provide a title && Id"
MISSING_GAME_ID = "You need to give me an ID"
GAME_NOT_FOUND = "Cannot find game by that id"


class GameShelfError(Exception):
    """
    Base exception for all GameShelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(GameShelfError):
    """
    Raised when a request body is missing a required field.

    When:  Create without title/date/genre, update without id/title,
           delete without any identifier.
    HTTP:  422 Unprocessable Entity
    """

    status_code = 422

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["missing_fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(GameShelfError):
    """
    Raised when an identifier does not resolve to a stored game.

    When:  Update or delete with an id that is malformed or absent.
    HTTP:  422 Unprocessable Entity (not 404)
    """

    status_code = 422

    def __init__(
        self,
        resource_id: Optional[Any] = None,
        message: str = GAME_NOT_FOUND,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(GameShelfError):
    """
    Raised when a store operation fails unexpectedly.

    When:  Connection lost mid-query, constraint violation, store not connected.
    HTTP:  500 Internal Server Error

    The message returned to the client is always generic; the context is
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
