"""
SQLAlchemy User, Token and Permission models
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, LargeBinary, ForeignKey, Table
from sqlalchemy.sql import func
from storefront.database import Base

DEFAULT_PROFILE_PIC = "https://res.cloudinary.com/storefront/image/upload/default-avatar.png"

SCOPE_ACTIVATION = "activation"
SCOPE_AUTHENTICATION = "authentication"

PERMISSION_CODES = ("products:read", "products:write", "products:order")


users_permissions = Table(
    "users_permissions",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """User account"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone_number = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)
    activated = Column(Boolean, nullable=False, default=False)
    profile_pic = Column(String(500), nullable=False, default=DEFAULT_PROFILE_PIC)
    version = Column(Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', activated={self.activated})>"


class Token(Base):
    """Hashed activation or authentication token"""

    __tablename__ = "tokens"

    hash = Column(LargeBinary(32), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expiry = Column(DateTime(timezone=True), nullable=False)
    scope = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<Token(user_id={self.user_id}, scope='{self.scope}', expiry={self.expiry})>"


class Permission(Base):
    """Permission code such as products:read"""

    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(100), nullable=False, unique=True)

    def __repr__(self):
        return f"<Permission(code='{self.code}')>"
