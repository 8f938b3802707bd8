"""User registration and login.

Passwords are stored and compared as plain text. This reproduces the
behavior existing clients depend on (200 with the user object, or 401) and
is not meant for production use.
"""

from __future__ import annotations

import re

import structlog

from classroom.core.errors import AuthError, ConflictError, ValidationError
from classroom.core.models import User
from classroom.core.store import EntityStore, Table

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_email(email: str) -> bool:
    """Check if email has a valid format."""
    return bool(EMAIL_PATTERN.match(email))


class AccountService:
    """Registration and credential checks."""

    def __init__(self, store: EntityStore):
        self.store = store

    def get_user(self, user_id: int) -> User | None:
        return self.store.get(Table.USERS, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.store.find(Table.USERS, lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> User | None:
        normalized = email.lower()
        return self.store.find(Table.USERS, lambda u: u.email.lower() == normalized)

    def register(
        self,
        username: str,
        password: str,
        email: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
        grade_level: int | None = None,
        preferred_language: str = "en",
    ) -> User:
        """Create a new user.

        Raises:
            ValidationError: On missing fields, bad email or grade level
            ConflictError: If the username or email is already registered
        """
        if not password:
            raise ValidationError("Password is required")
        if not validate_email(email):
            raise ValidationError("Invalid email format")

        if self.get_user_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' is already taken")
        if self.get_user_by_email(email) is not None:
            raise ConflictError(f"Email '{email}' is already registered")

        user = self.store.create(
            Table.USERS,
            User(
                username=username,
                password=password,
                email=email,
                full_name=full_name,
                avatar_url=avatar_url,
                grade_level=grade_level,
                preferred_language=preferred_language,
            ),
        )
        logger.info("user_registered", user_id=user.id, username=username)
        return user

    def login(self, username: str, password: str) -> User:
        """Return the user if the password matches exactly.

        Raises:
            AuthError: On unknown username or wrong password
        """
        user = self.get_user_by_username(username)
        if user is None or user.password != password:
            logger.info("login_failed", username=username)
            raise AuthError("Invalid username or password")

        logger.info("login_succeeded", user_id=user.id)
        return user
