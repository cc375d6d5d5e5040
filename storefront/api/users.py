"""
User and token API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.api.deps import get_repositories
from storefront.errors import ValidationFailedError, EditConflictError, InvalidCredentialsError
from storefront.repositories import Repositories
from storefront.schemas.user import (
    UserCreate,
    UserResponse,
    ActivationRequest,
    CredentialsRequest,
    AuthenticationTokenResponse
)
from storefront.services.user_service import UserService

router = APIRouter(prefix="/v1", tags=["users"])


def get_user_service(repos: Repositories = Depends(get_repositories)) -> UserService:
    """Dependency to get UserService instance"""
    return UserService(repos)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED, summary="Register user")
def register_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
):
    """
    Register a new account

    The account starts deactivated; an activation token is published with the
    UserRegistered event for the mailer.
    """
    try:
        return service.register(user_data)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)


@router.put("/users/activated", response_model=UserResponse, summary="Activate user")
def activate_user(
    activation: ActivationRequest,
    service: UserService = Depends(get_user_service)
):
    try:
        return service.activate(activation)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except EditConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post(
    "/tokens/authentication",
    response_model=AuthenticationTokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create authentication token"
)
def create_authentication_token(
    credentials: CredentialsRequest,
    service: UserService = Depends(get_user_service)
):
    """
    Exchange email and password for a bearer token
    """
    try:
        return service.authenticate(credentials)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )
