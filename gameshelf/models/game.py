"""
GameShelf Backend — Game SQLAlchemy Model
===========================================

What:  ORM model representing the `games` table, one row per game document.
How:   Inherits from the declarative Base; Database.connect() creates the table.
Who:   Used by GameRepository for every store operation.

Table Design:
    - id: UUID primary key generated in Python at insert, never reused
    - title / date / genre: free text, all required
    - created_at: UTC insert time, gives the list endpoint a stable order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gameshelf.database import Base


class Game(Base):
    """
    A game record.

    Lifecycle:
        1. Created by POST /api/game/create
        2. Listed by GET /api/game/get
        3. Title changed by PUT /api/game/update (other fields never change)
        4. Removed by DELETE /api/game/destroy (hard delete)
    """

    __tablename__ = "games"

    # Uuid is the generic type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Free-form text such as "July 1981", not a calendar date
    date: Mapped[str] = mapped_column(String(255), nullable=False)

    genre: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Game(id={self.id}, title='{self.title}')>"
