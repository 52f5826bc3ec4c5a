from database.repositories.base import BaseRepository
from database.repositories.match import MatchRepository

__all__ = [
    'BaseRepository',
    'MatchRepository',
]
