"""Repository package: data-access objects over an AsyncSession."""
from .game_repository import GameRepository

__all__ = [
    'GameRepository',
]
