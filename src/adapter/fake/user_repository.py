"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> User:
        if any(u.email == user.email or u.external_id == user.external_id for u in self.store.values()):
            raise DuplicateError("Email already registered")

        stored = replace(
            user,
            id=uuid.uuid4().hex,
            sessions=list(user.sessions),
            roles=set(user.roles),
        )
        self.store[stored.id] = stored
        return stored

    # ── read operations ──────────────────────────────────────

    def find_by_external_id(self, external_id: uuid.UUID) -> User | None:
        for user in self.store.values():
            if user.external_id == external_id:
                return user
        return None

    def find_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def find_all(self) -> list[User]:
        return list(self.store.values())
