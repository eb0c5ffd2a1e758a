"""User API routes.

Endpoints:
- GET /users/{user_id}: Get a user by public id
- GET /users: List all users
- POST /users: Create a user

Each handler validates its input, delegates to user_service and projects the
result to FindUserDto. Domain errors propagate to the handlers registered in
api.errors, so nothing is written to the response on failure.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from api.dependencies import get_user_repo
from api.models import FindUserDto, project_user
from api.validation import parse_create_user_input, parse_identifier
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=FindUserDto, name="find_user_by_id")
async def find_by_id(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    """Get a user by public id.

    Raises:
        ValidationError: user_id is not a UUID v4 (400)
        NotFoundError: no such user (404)
    """
    external_id = parse_identifier(user_id)
    user = user_service.find_by_id(repo, external_id)
    return project_user(user)


@router.get("", response_model=list[FindUserDto])
async def find_all(repo: UserRepository = Depends(get_user_repo)):
    """List all users. An empty store yields an empty list."""
    return [project_user(user) for user in user_service.find_all(repo)]


@router.post("", response_model=FindUserDto, status_code=status.HTTP_201_CREATED)
async def create(
    request: Request,
    response: Response,
    payload: Any = Body(None),
    repo: UserRepository = Depends(get_user_repo),
):
    """Create a user.

    Responds 201 with a Location header pointing at the new user.

    Raises:
        ValidationError: email or password missing or malformed (400)
        DuplicateError: email already registered (409)
    """
    dto = parse_create_user_input(payload)
    user = user_service.create(repo, email=dto.email, password=dto.password)
    result = project_user(user)

    response.headers["Location"] = str(request.url_for("find_user_by_id", user_id=str(result.id)))
    logger.info("User created via API", extra={"userId": str(result.id)})
    return result
