"""Authentication and user management services."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.common import utcnow
from ..models.user import User

_hasher = PasswordHasher()
logger = get_logger("auth")

MIN_PASSWORD_LENGTH = 6


def _check_password(password: str) -> None:
    if not password:
        raise ValueError("Password cannot be empty")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def get_user(user_id: str, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    username: str,
    password: str,
    full_name: str | None = None,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with a hashed password."""

    username = username.strip()
    if not username:
        raise ValueError("Username cannot be empty")
    _check_password(password)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise ValueError("Username already exists")
        user = User(username=username, password_hash=password_hash, full_name=full_name)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = username.strip()
    if not username:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.info("Login rejected", extra={"username": username})
            return None

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = utcnow()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def reset_password(*, user_id: str, password: str, session_factory: SessionFactory) -> User:
    """Reset a user's password to the provided value."""

    _check_password(password)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise ValueError("User not found")
        user.password_hash = password_hash
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def complete_onboarding(*, user_id: str, session_factory: SessionFactory) -> User:
    """Mark the user's first-run onboarding as finished; repeating it is harmless."""

    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise ValueError("User not found")
        user.is_onboarded = True
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user
