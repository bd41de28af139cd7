"""Authentication routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from app.api.deps import CurrentUser, DBSession
from app.models import User
from app.schemas.auth import LoginResponse, UserLogin, UserResponse
from app.schemas.common import DataResponse
from app.services.auth import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(user_data: UserLogin, db: DBSession) -> dict:
    """Login and return a bearer token."""
    result = await db.execute(select(User).where(User.email == user_data.email))
    user = result.scalar_one_or_none()

    if not user or not auth_service.verify_password(user_data.password, user.hashed_password):
        logger.info(f"Failed login attempt for {user_data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    token = auth_service.create_access_token(user.id, user.role.value)
    return {"success": True, "token": token, "data": user}


@router.get("/me", response_model=DataResponse[UserResponse])
async def get_current_user_info(current_user: CurrentUser) -> dict:
    """Get current authenticated user info."""
    return {"success": True, "data": current_user}
