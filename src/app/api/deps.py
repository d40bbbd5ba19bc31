"""FastAPI dependency injection for authentication, authorization and services."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AccessDeniedError
from app.core.permissions import can_access_customer
from app.core.security import get_user_id_from_token
from app.db.session import get_db
from app.models.user import User
from app.repositories.customer import CustomerRepository
from app.repositories.user import UserRepository
from app.services.auth import AuthService
from app.services.summary import SummaryService

# OAuth2 bearer token scheme
security = HTTPBearer()


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session

    Returns:
        AuthService instance
    """
    return AuthService(UserRepository(db), CustomerRepository(db))


async def get_summary_service(
    db: AsyncSession = Depends(get_db),
) -> SummaryService:
    return SummaryService(db)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Extract and validate user from JWT token.

    Args:
        credentials: HTTP bearer token credentials
        user_repo: User repository for database queries

    Returns:
        Authenticated user object

    Raises:
        HTTPException: If token is invalid, expired, or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = get_user_id_from_token(credentials.credentials, expected_type="access")
    except (JWTError, ValueError):
        raise credentials_exception

    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


async def require_admin(
    current_user: User = Depends(get_current_user),
) -> User:
    """Allow only ADMIN users through."""
    if not current_user.is_admin:
        raise AccessDeniedError(details={"user_id": str(current_user.id)})
    return current_user


def ensure_customer_access(user: User, customer_id: UUID | None) -> None:
    """Raise AccessDeniedError unless ``user`` may read ``customer_id``'s data."""
    if not can_access_customer(user.customer_id, user.is_admin, customer_id):
        raise AccessDeniedError(
            details={
                "user_id": str(user.id),
                "customer_id": str(customer_id) if customer_id else None,
            }
        )
