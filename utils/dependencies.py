"""
Dependency injection utilities for FastAPI.
"""
from typing import Callable, Type, TypeVar
from sqlalchemy.orm import Session
from fastapi import Depends

from store.repositories.base import BaseRepository
from database.postgres import get_db

T = TypeVar("T", bound=BaseRepository)


def get_repository(repository_class: Type[T]) -> Callable[[Session], T]:
    """
    Generic dependency function that creates and returns repository instances.
    The repository shares the request's session, so every repository injected
    into one controller writes inside the same transaction.

    Usage:
        async def get_location_controller(
            db: Session = Depends(get_db),
            location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
        ):
            ...

    Args:
        repository_class: The repository class to instantiate

    Returns:
        A callable dependency function that returns the repository instance
    """
    def _get_repository(db: Session = Depends(get_db)) -> T:
        return repository_class(db)

    return _get_repository
