"""Users table: lookups, directory search and the public projections."""
from typing import List, Optional, Sequence
from sqlalchemy import or_

from .base import BaseRepository
from ..models.user import User
from ..schemas.user import UserSummary, UserResponse
from ..utils.db_helpers import escape_like, LIKE_ESCAPE_CHAR


class UserRepository(BaseRepository):

    def get(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_many(self, user_ids: Sequence[str]) -> List[User]:
        """Users for the given ids, in the order the ids were given. Unknown ids are dropped."""
        if not user_ids:
            return []
        found = {u.id: u for u in self.db.query(User).filter(User.id.in_(list(user_ids))).all()}
        return [found[uid] for uid in user_ids if uid in found]

    def find_conflict(self, username: str, email: str) -> Optional[str]:
        """Name of the first unique field already taken, if any"""
        if self.db.query(User.id).filter(User.username == username).first():
            return "username"
        if self.db.query(User.id).filter(User.email == email).first():
            return "email"
        return None

    def search(self, query: str) -> List[User]:
        """Case-insensitive substring match on full name, username or email"""
        pattern = f"%{escape_like(query)}%"
        return self.db.query(User).filter(
            or_(
                User.full_name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                User.username.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                User.email.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            )
        ).order_by(User.username.asc()).all()

    def add(self, user: User) -> User:
        self.db.add(user)
        return user

    @staticmethod
    def to_summary(user: User) -> UserSummary:
        return UserSummary(
            id=user.id,
            full_name=user.full_name,
            username=user.username,
            email=user.email,
        )

    @staticmethod
    def to_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            full_name=user.full_name,
            username=user.username,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
        )
