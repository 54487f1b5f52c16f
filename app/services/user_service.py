"""
User Service
خدمة المستخدمين - البحث والتسجيل وتسجيل الدخول
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..models.user import User, UserRole
from ..repositories import UserRepository
from ..schemas.user import RegisterRequest, UserResponse, Token
from ..utils.db_helpers import guard_storage
from ..utils.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from ..utils.logging_config import get_logger
from ..utils.security import hash_password, verify_password, create_access_token

logger = get_logger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    @guard_storage("search users")
    def search(self, query: Optional[str]) -> List[UserResponse]:
        """البحث عن المستخدمين بالاسم أو اسم المستخدم أو البريد"""
        if not query or not query.strip():
            return []
        # Matched as typed; surrounding spaces are part of the substring
        return [self.users.to_response(u) for u in self.users.search(query)]

    @guard_storage("register user")
    def register(self, data: RegisterRequest) -> UserResponse:
        username = data.username.strip()
        email = str(data.email).lower()

        taken = self.users.find_conflict(username, email)
        if taken:
            raise ConflictError(f"A user with this {taken} already exists")

        user = User(
            full_name=data.full_name.strip(),
            username=username,
            email=email,
            hashed_password=hash_password(data.password),
            role=UserRole.USER.value,
        )
        self.users.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.log_with_context(logging.INFO, "User registered", entity_type="user", entity_id=user.id)
        return self.users.to_response(user)

    @guard_storage("authenticate")
    def authenticate(self, username: str, password: str) -> Token:
        user = self.users.get_by_username(username.strip())
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login for {username!r}")
            raise UnauthorizedError("Invalid username or password")
        if not user.is_active:
            raise ForbiddenError("Account disabled")
        return Token(access_token=create_access_token(data={"sub": user.id}))

    @guard_storage("seed admin")
    def ensure_admin(self, username: str, password: str, email: str, full_name: str) -> bool:
        """Create the configured admin account if it does not exist yet. Returns True when created."""
        if self.users.get_by_username(username):
            return False
        admin = User(
            full_name=full_name,
            username=username,
            email=email.lower(),
            hashed_password=hash_password(password),
            role=UserRole.ADMIN.value,
        )
        self.users.add(admin)
        self.db.commit()
        logger.info(f"Created admin user {username!r}")
        return True
