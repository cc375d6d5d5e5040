"""
User Service - accounts, activation and authentication tokens
"""
import logging
from datetime import timedelta
from typing import List, Optional

from werkzeug.security import generate_password_hash, check_password_hash

from storefront.config import settings
from storefront.errors import DuplicateEmailError, RecordNotFoundError, InvalidCredentialsError
from storefront.models.user import SCOPE_ACTIVATION, SCOPE_AUTHENTICATION, User
from storefront.publishers.event_publisher import EventPublisher
from storefront.repositories import Repositories
from storefront.schemas.user import (
    UserCreate,
    UserResponse,
    ActivationRequest,
    CredentialsRequest,
    TokenResponse,
    AuthenticationTokenResponse,
    validate_user,
    validate_email,
    validate_password_plaintext,
    validate_token_plaintext
)
from storefront.validator import Validator

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user accounts"""

    def __init__(self, repos: Repositories, event_publisher: Optional[EventPublisher] = None):
        self.repos = repos
        self.event_publisher = event_publisher or EventPublisher()

    def register(self, user_data: UserCreate) -> UserResponse:
        """
        Register a new, not yet activated user

        Grants the default permissions, creates an activation token and
        publishes UserRegistered so the token can be mailed out.

        Raises:
            ValidationFailedError: If a field is invalid or the email is taken
        """
        v = Validator()
        validate_user(v, user_data)
        v.raise_if_invalid()

        try:
            user = self.repos.users.insert(user_data, generate_password_hash(user_data.password))
        except DuplicateEmailError:
            v.add_error("email", "a user with this email address already exists")
            v.raise_if_invalid()

        self.repos.permissions.add_for_user(user.id, *settings.DEFAULT_PERMISSIONS)
        plaintext, _ = self.repos.tokens.new(
            user.id, timedelta(hours=settings.ACTIVATION_TOKEN_TTL_HOURS), SCOPE_ACTIVATION
        )

        response = UserResponse.model_validate(user)
        logger.info("User %s registered", response.id)

        self.event_publisher.publish_user_registered({
            "user_id": response.id,
            "email": response.email,
            "first_name": response.first_name,
            "activation_token": plaintext
        })
        return response

    def activate(self, activation: ActivationRequest) -> UserResponse:
        """
        Activate the account owning an activation token

        Raises:
            ValidationFailedError: If the token is malformed, unknown or expired
            EditConflictError: If the user row changed meanwhile
        """
        v = Validator()
        validate_token_plaintext(v, activation.token)
        v.raise_if_invalid()

        try:
            user = self.repos.users.get_for_token(SCOPE_ACTIVATION, activation.token)
        except RecordNotFoundError:
            v.add_error("token", "invalid or expired activation token")
            v.raise_if_invalid()

        self.repos.users.update(user.id, user.version, activated=True)
        self.repos.tokens.delete_all_for_user(SCOPE_ACTIVATION, user.id)
        logger.info("User %s activated", user.id)
        return UserResponse.model_validate(user)

    def authenticate(self, credentials: CredentialsRequest) -> AuthenticationTokenResponse:
        """
        Exchange email and password for an authentication token

        Raises:
            ValidationFailedError: If email or password is malformed
            InvalidCredentialsError: If they do not match a user
        """
        v = Validator()
        validate_email(v, credentials.email)
        validate_password_plaintext(v, credentials.password)
        v.raise_if_invalid()

        try:
            user = self.repos.users.get_by_email(credentials.email)
        except RecordNotFoundError:
            raise InvalidCredentialsError()

        if not check_password_hash(user.password_hash, credentials.password):
            raise InvalidCredentialsError()

        plaintext, token = self.repos.tokens.new(
            user.id, timedelta(hours=settings.AUTH_TOKEN_TTL_HOURS), SCOPE_AUTHENTICATION
        )
        return AuthenticationTokenResponse(
            authentication_token=TokenResponse(token=plaintext, expiry=token.expiry)
        )

    def get_for_token(self, token_plaintext: str) -> User:
        """Resolve a bearer token to its user"""
        return self.repos.users.get_for_token(SCOPE_AUTHENTICATION, token_plaintext)

    def get_permissions(self, user_id: int) -> List[str]:
        return self.repos.permissions.get_all_for_user(user_id)
