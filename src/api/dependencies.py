from fastapi import HTTPException, Request
from pymongo.database import Database

from adapter.mongodb.connection import DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from port.user_repository import UserRepository


def _get_db(request: Request) -> Database:
    """Get MongoDB database from the app-owned client, raising 503 if unavailable."""
    client = getattr(request.app.state, 'mongo_client', None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))
