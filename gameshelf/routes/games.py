"""
GameShelf Backend — Game Route Handlers
=========================================

What:  The four game endpoints.
How:   Each handler parses the body, delegates to GameService, and returns
       the ORM object through a GameResponse model. Errors raised by the
       service are turned into `{"error": ...}` responses by main.py.

Route Inventory:
    POST   /api/game/create        create a game
    GET    /api/game/get           list every game
    PUT    /api/game/update        change a game's title
    DELETE /api/game/destroy/{id}  delete by path id
    DELETE /api/game/destroy/      delete by body id
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gameshelf.database import get_db_session
from gameshelf.schemas.game import (
    ErrorResponse,
    GameCreate,
    GameDestroy,
    GameResponse,
    GameUpdate,
)
from gameshelf.services.game_service import game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/game", tags=["Games"])

_error_responses = {
    422: {"description": "Missing field or unknown game id", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/create",
    response_model=GameResponse,
    responses=_error_responses,
    summary="Create a game",
)
async def create_game(
    payload: GameCreate,
    db: AsyncSession = Depends(get_db_session),
) -> GameResponse:
    """Store a new game. title, date and genre are all required."""
    game = await game_service.create_game(db=db, payload=payload)
    return GameResponse.model_validate(game)


@router.get(
    "/get",
    response_model=List[GameResponse],
    responses={500: _error_responses[500]},
    summary="List all games",
)
async def list_games(
    db: AsyncSession = Depends(get_db_session),
) -> List[GameResponse]:
    games = await game_service.list_games(db=db)
    return [GameResponse.model_validate(game) for game in games]


@router.put(
    "/update",
    response_model=GameResponse,
    responses=_error_responses,
    summary="Update the title of a game",
)
async def update_game(
    payload: GameUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> GameResponse:
    """Only `title` is changed; date and genre keep their stored values."""
    game = await game_service.update_game(db=db, payload=payload)
    return GameResponse.model_validate(game)


@router.delete(
    "/destroy/{game_id}",
    response_model=GameResponse,
    responses=_error_responses,
    summary="Delete a game by path id",
)
async def destroy_game(
    game_id: str,
    payload: Optional[GameDestroy] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> GameResponse:
    """
    Delete the game named in the URL. A body `id` is only consulted when
    the path segment is empty, which routes to destroy_game_from_body.
    """
    game = await game_service.destroy_game(db=db, path_id=game_id, payload=payload)
    return GameResponse.model_validate(game)


@router.delete(
    "/destroy/",
    response_model=GameResponse,
    responses=_error_responses,
    summary="Delete a game by body id",
)
@router.delete(
    "/destroy",
    response_model=GameResponse,
    responses=_error_responses,
    include_in_schema=False,
)
async def destroy_game_from_body(
    payload: Optional[GameDestroy] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> GameResponse:
    game = await game_service.destroy_game(db=db, payload=payload)
    return GameResponse.model_validate(game)
