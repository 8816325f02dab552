"""
User management and job application endpoints.

- POST /users, GET /users: admin only
- GET/PATCH/DELETE /users/{username}: that user or an admin
- POST /users/{username}/jobs/{job_id}: apply to a job, that user or an admin
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import CurrentUser, get_admin_user, get_user_or_admin
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserDetailResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """
    Add a user (possibly another admin). This is not the registration endpoint.

    Returns the new user and a token for them.
    """
    new_user = user_crud.register(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin.username} created user {new_user['username']}")
    return UserCreateResponse(
        user=UserResponse.model_validate(new_user),
        token=create_access_token(new_user["username"], new_user["isAdmin"]),
    )


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """List all users."""
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_user_or_admin),
):
    """Retrieve a user with the ids of the jobs they applied to."""
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_user_or_admin),
):
    """Partially update a user's name, email or password."""
    return user_crud.update(db, username, request.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_user_or_admin),
):
    """Delete a user and their applications."""
    user_crud.remove(db, username)
    return None


@router.post("/{username}/jobs/{job_id}", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_user_or_admin),
):
    """Apply to a job. Applying twice to the same job is a 409."""
    user_crud.apply(db, username, job_id)
    return ApplicationResponse(applied=job_id)
