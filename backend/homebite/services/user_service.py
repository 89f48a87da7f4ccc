import logging
from typing import Optional

from sqlalchemy.orm import Session

from homebite.errors import Conflict, NotFound, ValidationError
from homebite.models.user import User, UserRole
from homebite.repositories.user_repo import UserRepository
from homebite.services.auth_service import hash_password
from homebite.utils.transactions import transaction
from homebite.utils.validation import validate_choice

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService:
    """The user directory: registration and lookup by id."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def get_user(self, user_id: int) -> User:
        user = self.user_repo.get(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def register_user(
        self,
        name: str,
        email: str,
        password: str,
        role: str = UserRole.USER.value,
        phone: Optional[str] = None,
    ) -> User:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password:
            raise ValidationError("Missing required fields")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        validate_choice(role, "role", [r.value for r in UserRole])
        if self.user_repo.get_by_email(email):
            raise Conflict("A user with this email already exists")

        with transaction(self.db):
            user = self.user_repo.add(
                User(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=role,
                    phone=phone,
                )
            )
        log.info("user %s registered with role %s", user.id, role)
        return user
