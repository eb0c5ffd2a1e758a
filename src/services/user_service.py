"""User service — lookup and creation business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.
"""

import logging
import os
from uuid import UUID

import bcrypt

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def find_by_id(repo: UserRepository, external_id: UUID) -> User:
    """Return the user with the given public identifier.

    Raises:
        NotFoundError: no user has this identifier
    """
    user = repo.find_by_external_id(external_id)
    if user is None:
        raise NotFoundError(f"User {external_id} not found")
    return user


def find_all(repo: UserRepository) -> list[User]:
    return repo.find_all()


def create(repo: UserRepository, email: str, password: str) -> User:
    """Create a user from already validated input.

    Returns the stored User domain object.

    Raises:
        DuplicateError: email already registered
    """
    if repo.find_by_email(email):
        raise DuplicateError("Email already registered")

    user = repo.insert(User.create(email=email, password_hash=hash_password(password)))
    logger.info("User registered", extra={"externalId": str(user.external_id)})
    return user
