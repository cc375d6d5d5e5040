"""
User Repository - Data Access Layer
"""
import hashlib
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import RecordNotFoundError, DuplicateEmailError
from storefront.models.user import User, Token
from storefront.repositories.versioning import update_versioned
from storefront.schemas.user import UserCreate


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, user_data: UserCreate, password_hash: str) -> User:
        """
        Create a user

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        user = User(
            **user_data.model_dump(exclude={"password"}),
            password_hash=password_hash,
            activated=False
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmailError(user_data.email) from e
        self.db.refresh(user)
        return user

    def get_by_email(self, email: str) -> User:
        """Get user by email"""
        user = self.db.scalar(select(User).where(User.email == email))
        if user is None:
            raise RecordNotFoundError()
        return user

    def update(self, user_id: int, version: int, **fields) -> int:
        """
        Persist profile fields or the activation flag if the version still matches

        Returns:
            The new version
        """
        try:
            new_version = update_versioned(self.db, User, user_id, version, **fields)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmailError(fields.get("email", "")) from e
        return new_version

    def get_for_token(self, token_scope: str, token_plaintext: str) -> User:
        """
        Get the user owning an unexpired token of the given scope

        Raises:
            RecordNotFoundError: If no such token exists or it has expired
        """
        token_hash = hashlib.sha256(token_plaintext.encode()).digest()
        stmt = (
            select(User)
            .join(Token, Token.user_id == User.id)
            .where(
                Token.hash == token_hash,
                Token.scope == token_scope,
                Token.expiry > datetime.now(timezone.utc)
            )
        )
        user = self.db.scalar(stmt)
        if user is None:
            raise RecordNotFoundError()
        return user
