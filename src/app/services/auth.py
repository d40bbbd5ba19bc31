"""Authentication service with business logic."""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from jose import JWTError

from app.core.exceptions import CustomerNotFoundError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from app.models.user import Role, User
from app.repositories.customer import CustomerRepository
from app.repositories.user import UserRepository
from app.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository, customer_repo: CustomerRepository):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            customer_repo: Customer repository to validate customer links
        """
        self.user_repo = user_repo
        self.customer_repo = customer_repo

    async def register(
        self,
        username: str,
        password: str,
        role: Role = Role.USER,
        customer_id: UUID | None = None,
    ) -> User:
        """
        Register a new user.

        Args:
            username: Unique username
            password: Plain text password
            role: USER or ADMIN
            customer_id: Optional customer whose data the user owns

        Returns:
            Created user object

        Raises:
            HTTPException: If username already exists
            CustomerNotFoundError: If customer_id does not exist
        """
        if await self.user_repo.username_exists(username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already registered",
            )

        if customer_id is not None and not await self.customer_repo.exists(customer_id):
            raise CustomerNotFoundError(customer_id)

        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            customer_id=customer_id,
        )

        created_user = await self.user_repo.create(user)
        logger.info("User registered", extra={"user_id": str(created_user.id)})
        return created_user

    async def login(self, username: str, password: str) -> TokenPair:
        """
        Authenticate user and return JWT tokens.

        Raises:
            HTTPException: If credentials are invalid or the account is deactivated
        """
        user = await self.user_repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is deactivated",
            )

        return TokenPair(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Generate new token pair using refresh token.

        Raises:
            HTTPException: If refresh token is invalid or the user is gone/inactive
        """
        try:
            user_id = get_user_id_from_token(refresh_token, expected_type="refresh")
        except (JWTError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired refresh token",
            )

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is deactivated",
            )

        return TokenPair(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )
