"""Integration tests: users routes → user_service → MongoUserRepository.

Only the pymongo collection is mocked; every layer above it is real.
"""

import unittest
import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from api.dependencies import get_user_repo
from api.main import app


def _make_doc(**overrides) -> dict:
    """Create a users collection document with defaults for testing."""
    doc = {
        '_id': uuid.uuid4().hex,
        'external_id': str(uuid.uuid4()),
        'email': 'test@example.com',
        'password_hash': '$2b$04$hash',
        'created_at': datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc),
        'sessions': [],
        'roles': [],
    }
    doc.update(overrides)
    return doc


def _expected_json(doc: dict) -> dict:
    return {
        'id': doc['external_id'],
        'email': doc['email'],
        'created_at': '2026-01-23T12:00:00Z',
        'sessions': doc['sessions'],
        'roles': sorted(doc['roles']),
    }


class TestUsersIntegration(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.mock_collection = MagicMock()
        self.mock_db = MagicMock()
        self.mock_db.__getitem__.return_value = self.mock_collection
        app.dependency_overrides[get_user_repo] = lambda: MongoUserRepository(self.mock_db)

    def tearDown(self):
        app.dependency_overrides.clear()

    # ── GET /users/{user_id} ──────────────────────────────────

    def test_find_by_id_valid_id(self):
        doc = _make_doc(roles=['admin'])
        self.mock_collection.find_one.return_value = doc

        response = self.client.get(f"/users/{doc['external_id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), _expected_json(doc))
        self.mock_db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)
        self.mock_collection.find_one.assert_called_once_with({'external_id': doc['external_id']})

    def test_find_by_id_invalid_id_never_queries_store(self):
        response = self.client.get("/users/not-a-uuid")

        self.assertEqual(response.status_code, 400)
        self.mock_collection.find_one.assert_not_called()

    def test_find_by_id_unknown_id(self):
        self.mock_collection.find_one.return_value = None

        response = self.client.get(f"/users/{uuid.uuid4()}")

        self.assertEqual(response.status_code, 404)

    def test_find_by_id_store_error(self):
        self.mock_collection.find_one.side_effect = PyMongoError("connection reset")

        response = self.client.get(f"/users/{uuid.uuid4()}")

        self.assertEqual(response.status_code, 503)

    # ── GET /users ────────────────────────────────────────────

    def test_find_all_lengths(self):
        for count in (0, 1, 2):
            with self.subTest(count=count):
                docs = [_make_doc(email=f'user{i}@example.com') for i in range(count)]
                self.mock_collection.find.return_value = iter(docs)

                response = self.client.get("/users")

                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json(), [_expected_json(d) for d in docs])

    def test_find_all_store_error(self):
        self.mock_collection.find.side_effect = PyMongoError("cursor died")

        response = self.client.get("/users")

        self.assertEqual(response.status_code, 503)

    # ── POST /users ───────────────────────────────────────────

    @patch('services.user_service.BCRYPT_ROUNDS', 4)
    def test_create_valid_body(self):
        inserted = []

        def insert_one(doc):
            inserted.append(dict(doc))
            return MagicMock(inserted_id=doc['_id'])

        def find_one(filter):
            if '_id' in filter:
                return next((d for d in inserted if d['_id'] == filter['_id']), None)
            return None

        self.mock_collection.insert_one.side_effect = insert_one
        self.mock_collection.find_one.side_effect = find_one

        response = self.client.post(
            "/users",
            json={"email": "test@example.com", "password": "Password1", "ignored": True},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(inserted), 1)
        stored = inserted[0]
        data = response.json()
        self.assertEqual(data['id'], stored['external_id'])
        self.assertEqual(data['email'], 'test@example.com')
        self.assertEqual(data['sessions'], [])
        self.assertEqual(data['roles'], [])
        self.assertNotIn('password', data)
        self.assertNotIn('ignored', stored)
        self.assertTrue(stored['password_hash'].startswith('$2'))
        self.assertIn(stored['external_id'], response.headers['location'])
        self.mock_collection.find_one.assert_any_call({'email': 'test@example.com'})

    def test_create_invalid_body_never_touches_store(self):
        response = self.client.post("/users", json={})

        self.assertEqual(response.status_code, 400)
        self.mock_collection.find_one.assert_not_called()
        self.mock_collection.insert_one.assert_not_called()
