import asyncio
import re
from functools import partial

from passlib.context import CryptContext

# Password hashing context, bcrypt with work factor 10
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

USER_ID_PATTERN = re.compile(r"[0-9a-fA-F-]{36}")


def get_password_hash(password: str) -> str:
    """
    Hash a password

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt digest
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password

    Returns:
        True if password matches hash, False otherwise

    Raises:
        ValueError: If ``hashed_password`` is not a recognised digest
    """
    return pwd_context.verify(plain_password, hashed_password)


async def hash_password_async(password: str) -> str:
    """Hash a password in the default executor"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(get_password_hash, password))


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password in the default executor"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(verify_password, plain_password, hashed_password))


def is_valid_user_id(user_id: str) -> bool:
    """
    Check that a user id looks like a UUID

    Only the shape is checked: 36 characters of hex digits and hyphens.
    """
    return bool(USER_ID_PATTERN.fullmatch(user_id))
