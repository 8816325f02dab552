"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) account and return a JWT
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.schemas.user import TokenRequest, TokenResponse, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: TokenRequest, db: Session = Depends(get_db)):
    """
    Authenticate a user and return a JWT.

    Use the token as `Authorization: Bearer <token>` on protected routes.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    return TokenResponse(token=create_access_token(user["username"], user["isAdmin"]))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account and log it in.

    Self-registered users are never admins; admins are created via POST /users.
    """
    new_user = user_crud.register(db, {**request.model_dump(by_alias=True), "isAdmin": False})
    logger.info(f"New user registered: {new_user['username']}")
    return TokenResponse(token=create_access_token(new_user["username"], new_user["isAdmin"]))
