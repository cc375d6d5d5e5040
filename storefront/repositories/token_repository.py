"""
Token Repository - Data Access Layer
"""
import base64
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Tuple

from sqlalchemy import delete
from sqlalchemy.orm import Session

from storefront.models.user import Token


def generate_token(user_id: int, ttl: timedelta, scope: str) -> Tuple[str, Token]:
    """
    Build a random token

    Returns:
        (plaintext for the client, Token row holding only the SHA-256 hash)
    """
    # 16 random bytes -> 26 base32 characters once padding is stripped
    plaintext = base64.b32encode(secrets.token_bytes(16)).decode().rstrip("=")
    token = Token(
        hash=hashlib.sha256(plaintext.encode()).digest(),
        user_id=user_id,
        expiry=datetime.now(timezone.utc) + ttl,
        scope=scope
    )
    return plaintext, token


class TokenRepository:
    """Repository for activation and authentication tokens"""

    def __init__(self, db: Session):
        self.db = db

    def new(self, user_id: int, ttl: timedelta, scope: str) -> Tuple[str, Token]:
        """Generate and store a token; returns the plaintext and the stored row"""
        plaintext, token = generate_token(user_id, ttl, scope)
        self.insert(token)
        return plaintext, token

    def insert(self, token: Token) -> None:
        self.db.add(token)
        self.db.commit()

    def delete_all_for_user(self, scope: str, user_id: int) -> None:
        """Invalidate every token of one scope for a user"""
        self.db.execute(delete(Token).where(Token.scope == scope, Token.user_id == user_id))
        self.db.commit()
