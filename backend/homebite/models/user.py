import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from homebite.db import Base


class UserRole(str, enum.Enum):
    USER = "user"
    COOK = "cook"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=UserRole.USER.value, index=True)
    phone = Column(String(15), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
