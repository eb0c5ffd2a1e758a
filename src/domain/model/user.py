"""User domain model."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class User:
    """Domain model representing a user.

    ``id`` is the internal storage key and stays ``None`` until the user is
    persisted. ``external_id`` is the public identifier exposed to clients.
    """
    external_id: uuid.UUID
    email: str
    password_hash: str
    created_at: datetime
    sessions: list[dict] = field(default_factory=list)
    roles: set[str] = field(default_factory=set)
    id: str | None = None

    @staticmethod
    def create(email: str, password_hash: str, roles: set[str] | None = None) -> 'User':
        """Factory for a brand-new, not yet stored user."""
        return User(
            external_id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
            sessions=[],
            roles=set(roles or ()),
        )
