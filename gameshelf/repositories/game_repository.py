"""
GameShelf Backend — Game Repository (Data-Access Layer)
=========================================================

What:  Single-record store operations for the `games` table.
How:   Wraps one AsyncSession. Writes are flushed, not committed; the
       session owner (the request dependency or a test fixture) commits.
Who:   GameService is the only caller inside the application.

Operations:
    create        INSERT one game, flush to assign the id
    find_all      SELECT every game in insertion order
    find_by_id    primary-key lookup, None when absent
    update_by_id  set fields on one game, None when absent
    delete_by_id  DELETE one game, returns the removed row or None
    remove_all    DELETE every game, returns the row count
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import asc, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gameshelf.models.game import Game

logger = logging.getLogger(__name__)

# id and created_at are assigned once at insert
UPDATABLE_FIELDS = frozenset({"title", "date", "genre"})


class GameRepository:
    """Data access for Game records bound to a single session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, title: str, date: str, genre: str) -> Game:
        game = Game(title=title, date=date, genre=genre)
        self.session.add(game)
        await self.session.flush()
        return game

    async def find_all(self) -> List[Game]:
        result = await self.session.execute(
            select(Game).order_by(asc(Game.created_at), asc(Game.id))
        )
        return list(result.scalars().all())

    async def find_by_id(self, game_id: uuid.UUID) -> Optional[Game]:
        return await self.session.get(Game, game_id)

    async def update_by_id(self, game_id: uuid.UUID, **fields) -> Optional[Game]:
        """
        Apply *fields* to the game with *game_id*.

        Raises:
            ValueError: If a field is not one of UPDATABLE_FIELDS. Checked
                before the lookup, so nothing is read or written.
        """
        unknown = sorted(set(fields) - UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update game fields: {', '.join(unknown)}")

        game = await self.find_by_id(game_id)
        if game is None:
            return None
        for name, value in fields.items():
            setattr(game, name, value)
        await self.session.flush()
        return game

    async def delete_by_id(self, game_id: uuid.UUID) -> Optional[Game]:
        game = await self.find_by_id(game_id)
        if game is None:
            return None
        await self.session.delete(game)
        await self.session.flush()
        return game

    async def remove_all(self) -> int:
        result = await self.session.execute(delete(Game))
        await self.session.flush()
        logger.debug("Removed %d games", result.rowcount)
        return result.rowcount
