# puzzle_backend/api/auth.py

import logging
from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from puzzle_backend.core.errors import (
    Forbidden,
    HashError,
    InternalError,
    Unauthorized,
    ValidationConflict,
)
from puzzle_backend.core.security import PasswordHasher, TokenClaims, TokenService
from puzzle_backend.database import get_db
from puzzle_backend.models.user import User as UserModel


logger = logging.getLogger(__name__)

router = APIRouter()

NO_TOKEN_MESSAGE = "No token provided. Access denied."
INVALID_TOKEN_MESSAGE = "Invalid or expired token. Access forbidden."


class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    username: str


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class LoginResponse(BaseModel):
    message: str
    token: str


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# -------------------------------
# Auth gate
# -------------------------------

def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Accepts only "Authorization: Bearer <token>".
    Missing token -> 401, anything that fails verification -> 403.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise Unauthorized(NO_TOKEN_MESSAGE)

    parts = auth_header.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise Unauthorized(NO_TOKEN_MESSAGE)

    if parts[0] != "Bearer":
        logger.warning("Rejected authorization scheme %r", parts[0])
        raise Forbidden(INVALID_TOKEN_MESSAGE)

    claims = tokens.verify(token)
    if claims is None:
        logger.warning("JWT verification failed for %s %s", request.method, request.url.path)
        raise Forbidden(INVALID_TOKEN_MESSAGE)

    request.state.user = claims
    return claims


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
def register(
    credentials: Optional[Credentials] = None,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    credentials = credentials or Credentials()
    try:
        user_exists = db.query(UserModel).filter(UserModel.username == credentials.username).first()
        if user_exists:
            raise ValidationConflict("Username already exists.")

        hashed = hasher.hash(credentials.password)
        new_user = UserModel(username=credentials.username, hashed_password=hashed)
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except (SQLAlchemyError, HashError):
        db.rollback()
        logger.exception("Error in /register")
        raise InternalError("Server error during registration.")

    logger.info("Registered user %s (id=%s)", new_user.username, new_user.id)
    return {
        "message": "User registered successfully.",
        "user": {"id": new_user.id, "username": new_user.username},
    }


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Optional[Credentials] = None,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    credentials = credentials or Credentials()
    try:
        user = db.query(UserModel).filter(UserModel.username == credentials.username).first()
    except SQLAlchemyError:
        logger.exception("Error in /login")
        raise InternalError("Server error during login.")

    if not user:
        raise ValidationConflict("User not found.")

    if not hasher.verify(credentials.password, user.hashed_password):
        raise ValidationConflict("Invalid password.")

    token = tokens.issue(user.id, user.username)
    return {"message": "Login successful.", "token": token}
