"""
Pydantic schemas for users and tokens
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from email_validator import EmailNotValidError, validate_email as parse_email_address

from storefront.validator import Validator


class UserCreate(BaseModel):
    """Schema for registering a user"""
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    email: str = ""
    password: str = ""
    address: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response; never carries the password hash"""
    id: int
    created_at: datetime
    first_name: str
    last_name: str
    phone_number: str
    email: str
    address: Optional[str] = None
    activated: bool
    profile_pic: str
    version: int

    model_config = ConfigDict(from_attributes=True)


class ActivationRequest(BaseModel):
    """Schema for activating an account"""
    token: str = ""


class CredentialsRequest(BaseModel):
    """Schema for requesting an authentication token"""
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    """Plaintext token handed to the client exactly once"""
    token: str
    expiry: datetime


class AuthenticationTokenResponse(BaseModel):
    authentication_token: TokenResponse


def validate_email(v: Validator, email: str) -> None:
    v.check(email != "", "email", "must be provided")
    if not email:
        return
    try:
        parse_email_address(email, check_deliverability=False)
    except EmailNotValidError:
        v.add_error("email", "must be a valid email address")


def validate_password_plaintext(v: Validator, password: str) -> None:
    v.check(password != "", "password", "must be provided")
    v.check(len(password.encode()) >= 8, "password", "must be at least 8 bytes long")
    v.check(len(password.encode()) <= 72, "password", "must not be more than 72 bytes long")


def validate_token_plaintext(v: Validator, token: str) -> None:
    v.check(token != "", "token", "must be provided")
    v.check(len(token) == 26, "token", "must be 26 bytes long")


def validate_user(v: Validator, user: UserCreate) -> None:
    v.check(user.first_name != "", "first_name", "must be provided")
    v.check(len(user.first_name.encode()) <= 255, "first_name", "must not be more than 255 bytes long")
    v.check(user.last_name != "", "last_name", "must be provided")
    v.check(len(user.last_name.encode()) <= 255, "last_name", "must not be more than 255 bytes long")
    v.check(user.phone_number != "", "phone_number", "must be provided")
    validate_email(v, user.email)
    validate_password_plaintext(v, user.password)
