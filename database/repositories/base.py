from typing import TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, obj: T) -> T:
        """Stage a new row and flush so generated ids are populated."""
        self.db.add(obj)
        self.db.flush()
        return obj
