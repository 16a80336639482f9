from database.repositories.base import BaseRepository
from database.repositories.application import ApplicationRepository
from database.repositories.usage import UsageRepository

__all__ = [
    'BaseRepository',
    'ApplicationRepository',
    'UsageRepository',
]
