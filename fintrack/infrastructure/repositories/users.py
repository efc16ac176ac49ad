"""
User repository
"""
from sqlalchemy.orm import Session

from fintrack.infrastructure.db.models import User


class UserRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        email: str,
        username: str,
        password_hash: str,
        currency: str,
        theme: str,
    ) -> User:
        """
        Insert a user and flush so the id is assigned

        Raises:
            IntegrityError: email or username already taken
        """
        user = User(
            email=email,
            username=username,
            password_hash=password_hash,
            currency=currency,
            theme=theme,
        )
        self.db.add(user)
        self.db.flush()
        self.db.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def update_settings(
        self,
        user_id: int,
        currency: str | None = None,
        theme: str | None = None,
    ) -> bool:
        """
        Update only the provided settings

        Returns:
            False if the user does not exist
        """
        changes = {}
        if currency is not None:
            changes[User.currency] = currency
        if theme is not None:
            changes[User.theme] = theme

        if not changes:
            return self.get_by_id(user_id) is not None

        rows = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update(changes, synchronize_session=False)
        )
        return rows > 0
