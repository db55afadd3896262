from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from audioscribe.core.exceptions import AuthError, ConflictError, ExternalServiceError, InternalError
from audioscribe.crud.crud_user import user_crud
from audioscribe.db.session import get_db
from audioscribe.schemas.user import (
    LoginRequest, LoginResponse, SignupRequest, SignupResponse, UserCreated, UserOut
)
from audioscribe.utils.security import hash_password_async, verify_password_async

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
async def signup(
        user_in: SignupRequest,
        db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Register a new user
    """
    try:
        # Check-then-insert; the store's unique constraint is the real guard
        if await user_crud.get_by_email(db, email=user_in.email):
            raise ConflictError("User already exists")

        hashed_password = await hash_password_async(user_in.password)
        user = await user_crud.create(
            db, email=user_in.email, hashed_password=hashed_password, name=user_in.name
        )
    except (ExternalServiceError, ValueError) as e:
        raise InternalError("Error during signup", details=str(e))

    logger.info(f"User signed up: {user.id}")
    return SignupResponse(user=UserCreated.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(
        credentials: LoginRequest,
        db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Check email and password and return the user without the digest
    """
    try:
        user = await user_crud.get_by_email(db, email=credentials.email)
        if not user:
            raise AuthError()

        if not await verify_password_async(credentials.password, user.password):
            raise AuthError()
    except (ExternalServiceError, ValueError) as e:
        raise InternalError("Error during login", details=str(e))

    return LoginResponse(user=UserOut.model_validate(user))
