"""
GameShelf Backend — Game Service (Business Rules)
===================================================

What:  Validates request payloads, resolves identifiers, and calls the
       repository for each of the four game operations.
How:   Stateless; every call receives the request's AsyncSession and builds
       a GameRepository over it. Failures are raised as GameShelfError
       subclasses and mapped to HTTP responses by the handlers in main.py.
Who:   Called by route handlers in routes/games.py.

Validation rules:
    create   title, date, genre all present and non-empty
    update   id and title present and non-empty; id must resolve
    destroy  an id from the path or the body; id must resolve

Identifier resolution:
    A value that does not parse as a UUID cannot name a stored game, so it
    raises the same NotFoundError as a well-formed id with no matching row.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gameshelf.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
    MISSING_GAME_FIELDS,
    MISSING_GAME_ID,
    MISSING_UPDATE_FIELDS,
)
from gameshelf.models.game import Game
from gameshelf.repositories.game_repository import GameRepository
from gameshelf.schemas.game import GameCreate, GameDestroy, GameUpdate

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def parse_game_id(raw_id: Optional[str]) -> uuid.UUID:
    """
    Convert a client-supplied identifier into a UUID.

    Raises:
        NotFoundError: If the value is not a valid UUID.
    """
    try:
        return uuid.UUID(str(raw_id))
    except (ValueError, TypeError, AttributeError):
        logger.warning("Malformed game id: %r", raw_id)
        raise NotFoundError(resource_id=raw_id, context={"reason": "malformed"})


class GameService:
    """
    Orchestrates validation and persistence for game records.

    Each public method maps one endpoint:
        create_game   → POST   /api/game/create
        list_games    → GET    /api/game/get
        update_game   → PUT    /api/game/update
        destroy_game  → DELETE /api/game/destroy/{id}
    """

    async def create_game(self, db: AsyncSession, payload: GameCreate) -> Game:
        """
        Persist a new game.

        Raises:
            ValidationError: If title, date or genre is missing or empty.
            DatabaseError: If the insert fails.
        """
        missing = [
            name for name in ("title", "date", "genre")
            if _is_blank(getattr(payload, name))
        ]
        if missing:
            raise ValidationError(message=MISSING_GAME_FIELDS, fields=missing)

        try:
            game = await GameRepository(db).create(
                title=payload.title,
                date=payload.date,
                genre=payload.genre,
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                context={"operation": "create_game", "error": str(e)}
            ) from e

        logger.info("Game created: %s (%s)", game.id, game.title)
        return game

    async def list_games(self, db: AsyncSession) -> List[Game]:
        """Return every stored game in insertion order."""
        try:
            return await GameRepository(db).find_all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                context={"operation": "list_games", "error": str(e)}
            ) from e

    async def update_game(self, db: AsyncSession, payload: GameUpdate) -> Game:
        """
        Change the title of an existing game. Other fields are untouched.

        Raises:
            ValidationError: If id or title is missing.
            NotFoundError: If id is malformed or no game has it.
        """
        if _is_blank(payload.id) or _is_blank(payload.title):
            missing = [n for n in ("id", "title") if _is_blank(getattr(payload, n))]
            raise ValidationError(message=MISSING_UPDATE_FIELDS, fields=missing)

        game_id = parse_game_id(payload.id)
        try:
            game = await GameRepository(db).update_by_id(game_id, title=payload.title)
        except SQLAlchemyError as e:
            raise DatabaseError(
                context={"operation": "update_game", "game_id": str(game_id), "error": str(e)}
            ) from e

        if game is None:
            logger.warning("Update for unknown game id %s", game_id)
            raise NotFoundError(resource_id=game_id)

        logger.info("Game updated: %s (title=%s)", game.id, game.title)
        return game

    async def destroy_game(
        self,
        db: AsyncSession,
        path_id: Optional[str] = None,
        payload: Optional[GameDestroy] = None,
    ) -> Game:
        """
        Delete a game by id, taken from the URL path or, when the path
        segment is empty, from the request body.

        Raises:
            ValidationError: If no identifier was supplied anywhere.
            NotFoundError: If the identifier is malformed or no game has it.
        """
        raw_id = path_id
        if _is_blank(raw_id) and payload is not None:
            raw_id = payload.id
        if _is_blank(raw_id):
            raise ValidationError(message=MISSING_GAME_ID, fields=["id"])

        game_id = parse_game_id(raw_id)
        try:
            game = await GameRepository(db).delete_by_id(game_id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                context={"operation": "destroy_game", "game_id": str(game_id), "error": str(e)}
            ) from e

        if game is None:
            logger.warning("Delete for unknown game id %s", game_id)
            raise NotFoundError(resource_id=game_id)

        logger.info("Game deleted: %s", game_id)
        return game


# Module-level instance (stateless, safe to share)
game_service = GameService()
