from typing import TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _add(self, instance: T) -> T:
        """Add a new row and flush so server defaults and ids are populated."""
        self.db.add(instance)
        self.db.flush()
        return instance
