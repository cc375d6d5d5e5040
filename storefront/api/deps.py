"""
Shared API dependencies: repositories, authentication and permission checks
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import RecordNotFoundError
from storefront.models.user import User
from storefront.repositories import Repositories, new_repositories
from storefront.schemas.user import validate_token_plaintext
from storefront.services.user_service import UserService
from storefront.validator import Validator


def get_repositories(db: Session = Depends(get_db)) -> Repositories:
    """Dependency to get the SQL repositories for this request"""
    return new_repositories(db)


def _invalid_token() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="invalid or missing authentication token",
        headers={"WWW-Authenticate": "Bearer"}
    )


def get_current_user(
    authorization: Optional[str] = Header(None),
    repos: Repositories = Depends(get_repositories)
) -> Optional[User]:
    """
    Resolve the bearer token to a user

    Returns None for anonymous requests (no Authorization header).
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise _invalid_token()

    v = Validator()
    validate_token_plaintext(v, token)
    if not v.valid():
        raise _invalid_token()

    try:
        return UserService(repos).get_for_token(token)
    except RecordNotFoundError:
        raise _invalid_token()


def require_authenticated_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="you must be authenticated to access this resource",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user


def require_activated_user(user: User = Depends(require_authenticated_user)) -> User:
    if not user.activated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="your user account must be activated to access this resource"
        )
    return user


def require_permission(code: str):
    """Dependency factory: the activated user must hold the permission code"""

    def dependency(
        user: User = Depends(require_activated_user),
        repos: Repositories = Depends(get_repositories)
    ) -> User:
        if code not in UserService(repos).get_permissions(user.id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="your user account doesn't have the necessary permissions to access this resource"
            )
        return user

    return dependency
