from typing import Protocol
from uuid import UUID

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Store failures surface as PersistenceError, unique key violations as
    DuplicateError.
    """
    def find_by_external_id(self, external_id: UUID) -> User | None:
        """Find a user by its public identifier. Return User or None if not found."""
        ...

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def find_all(self) -> list[User]:
        """Return every stored user in store order."""
        ...

    def insert(self, user: User) -> User:
        """Store a new user and return the stored record."""
        ...
