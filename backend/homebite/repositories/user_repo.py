from typing import Optional

from sqlalchemy.orm import Session

from homebite.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user
