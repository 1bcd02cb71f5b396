"""User registration and credential checks."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from travel_stories.domain.models import UserRecord
from travel_stories.errors import (
    ConflictError,
    CredentialsError,
    NotFoundError,
    ValidationError,
)
from travel_stories.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with this id, if present."""

    def create_user(
        self, full_name: str, email: str, password_hash: str
    ) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class UserService:
    """Application service for account lifecycle actions."""

    repository: UserRepository

    def register(
        self, full_name: str | None, email: str | None, password: str | None
    ) -> UserRecord:
        """Create an account, rejecting blank fields and taken emails."""
        if not full_name or not email or not password:
            raise ValidationError("All fields are required")
        # Check-then-insert: two concurrent sign-ups with one email can both pass.
        if self.repository.get_by_email(email) is not None:
            raise ConflictError("User already exists")
        user = self.repository.create_user(
            full_name=full_name,
            email=email,
            password_hash=hash_password(password),
        )
        logger.info("Created account", extra={"user_id": str(user.id)})
        return user

    def verify(self, email: str | None, password: str | None) -> UserRecord:
        """Return the user for a matching email/password pair."""
        if not email or not password:
            raise ValidationError("Email and Password are required")
        user = self.repository.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(password, user.password_hash):
            logger.info("Rejected login", extra={"email": email})
            raise CredentialsError("Invalid Credentials")
        return user

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""
        return self.repository.get_by_id(user_id)
