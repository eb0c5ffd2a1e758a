"""MongoDB implementation of UserRepository."""

import uuid
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    # ── indexes ────────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            results = [
                create_index_safe(self.collection, [('external_id', 1)], 'idx_users_external_id', unique=True),
                create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True),
                create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at'),
            ]
            return all(results)
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── mapping ───────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model.

        external_id is stored as its canonical string form.
        """
        return User(
            id=doc['_id'],
            external_id=uuid.UUID(str(doc['external_id'])),
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            sessions=list(doc.get('sessions') or []),
            roles=set(doc.get('roles') or []),
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.id,
            'external_id': str(user.external_id),
            'email': user.email,
            'password_hash': user.password_hash,
            'created_at': user.created_at,
            'sessions': list(user.sessions),
            'roles': sorted(user.roles),
        }

    # ── queries ───────────────────────────────────────────────

    def find_by_external_id(self, external_id: uuid.UUID) -> User | None:
        """Find a user by its public identifier. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'external_id': str(external_id)})
        except PyMongoError as e:
            logger.error("Failed to get user by external id", extra={"externalId": str(external_id), "error": str(e)})
            raise PersistenceError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise PersistenceError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def find_all(self) -> list[User]:
        """Return every stored user in store order."""
        try:
            docs = list(self.collection.find({}))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise PersistenceError("Failed to list users") from e
        return [self._to_domain(doc) for doc in docs]

    # ── write operations ──────────────────────────────────────

    def insert(self, user: User) -> User:
        """Insert a new user and return the record as stored.

        Assigns the internal id, then reads the document back so the caller
        sees exactly what was persisted.
        """
        user_doc = self._to_document(user)
        user_doc['_id'] = uuid.uuid4().hex
        try:
            result = self.collection.insert_one(user_doc)
            stored = self.collection.find_one({'_id': result.inserted_id})
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"email": user.email})
            raise DuplicateError("Email already registered") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": user.email, "error": str(e)})
            raise PersistenceError("Failed to create user") from e

        if stored is None:
            logger.error("Inserted user not found on read-back", extra={"userId": user_doc['_id']})
            raise PersistenceError("Failed to create user")

        logger.info("User created", extra={"userId": user_doc['_id'], "externalId": str(user.external_id)})
        return self._to_domain(stored)
