import contextlib
import logging
from typing import Callable, Iterator, Type, TypeVar

from sqlalchemy.orm import Session

from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseRepository)


@contextlib.contextmanager
def unit_of_work(session_factory: Callable[[], Session], repository_cls: Type[R]) -> Iterator[R]:
    """Per-unit-of-work transaction scope.

    Yields a repository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with unit_of_work(SessionLocal, ApplicationRepository) as repo:
            application = repo.get_for_user(application_id, user_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        repo = repository_cls(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
