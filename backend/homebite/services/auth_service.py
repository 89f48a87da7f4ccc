"""Credential verification behind a small pluggable interface.

The rest of the service only ever sees a ``Principal``; which mechanism
produced it (password compare here, anything else elsewhere) is up to the
``Authenticator`` implementation wired into the app.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from homebite.repositories.user_repo import UserRepository

pwd = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(p: str) -> str:
    return pwd.hash(p)


def verify_password(p: str, h: str) -> bool:
    return pwd.verify(p, h)


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: str


class Authenticator(ABC):
    @abstractmethod
    def verify(self, credentials: Credentials) -> Optional[Principal]:
        """Return the authenticated principal, or None when the credentials are invalid."""


class PasswordAuthenticator(Authenticator):
    def __init__(self, db: Session):
        self.user_repo = UserRepository(db)

    def verify(self, credentials: Credentials) -> Optional[Principal]:
        if not credentials.email or not credentials.password:
            return None
        user = self.user_repo.get_by_email(credentials.email)
        if not user or not verify_password(credentials.password, user.password_hash):
            return None
        return Principal(user_id=user.id, role=user.role)
