"""Authentication endpoints.

There is no session handling: login only checks credentials and returns
the user, and the status endpoint always reports "not authenticated".
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from classroom.core.accounts import AccountService
from classroom.web.deps import get_accounts
from classroom.web.schemas import (
    LoginRequest,
    MessageResponse,
    UserCreate,
    UserResponse,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    accounts: AccountService = Depends(get_accounts),
) -> UserResponse:
    """Register a new user."""
    user = accounts.register(
        username=user_data.username,
        password=user_data.password,
        email=user_data.email,
        full_name=user_data.full_name,
        avatar_url=user_data.avatar_url,
        grade_level=user_data.grade_level,
        preferred_language=user_data.preferred_language,
    )
    return UserResponse(**user.to_dict())


@router.post("/login", response_model=UserResponse)
async def login(
    credentials: LoginRequest,
    accounts: AccountService = Depends(get_accounts),
) -> UserResponse:
    """Check credentials and return the user (401 on mismatch)."""
    user = accounts.login(credentials.username, credentials.password)
    return UserResponse(**user.to_dict())


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    """Log out. Nothing to tear down without sessions."""
    return MessageResponse(message="Logged out successfully")


@router.get("/status", response_model=MessageResponse, status_code=status.HTTP_401_UNAUTHORIZED)
async def auth_status() -> JSONResponse:
    """Session check placeholder."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": "Not authenticated"},
    )
