"""Base repository holding the explicit session handle."""
from sqlalchemy.orm import Session


class BaseRepository:
    """Base for the repositories: every query goes through the injected session."""

    def __init__(self, db: Session):
        self.db = db
