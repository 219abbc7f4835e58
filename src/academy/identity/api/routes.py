"""FastAPI endpoints for user accounts."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from academy.identity.api.schemas import (
    RegisterUserRequest,
    StatusResponse,
    UserIdResponse,
    UserListResponse,
    UserResponse,
)
from academy.identity.user.registration import RegisterUser
from academy.identity.user.removal import DeleteUser
from academy.identity.user.user import User, UserRole
from academy.shared.query import fetch_all

router = APIRouter(prefix="/users", tags=["users"])


def _user_response(user) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        purchases_count=user.purchases_count,
        reviews_count=user.reviews_count,
        created_at=user.created_at,
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(name=body.name, email=body.email, role=body.role or UserRole.USER.value)
    user_id = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=user_id)


@router.get("", response_model=UserListResponse)
async def list_users() -> UserListResponse:
    return UserListResponse(users=[_user_response(user) for user in fetch_all(User)])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return _user_response(current_domain.repository_for(User).get(user_id))


@router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str) -> StatusResponse:
    """Delete a user with their reviews, orders and enrollments."""
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse()
