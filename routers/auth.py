"""Authentication routes for user registration, login, logout and the current user."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from security import hash_password, verify_password, issue_token, resolve_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])
bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: Session = Depends(get_db)
) -> Optional[models.User]:
    """Resolves the bearer token to a user. Anything that does not resolve is treated as anonymous."""
    if credentials is None:
        return None

    user_id = resolve_token(credentials.credentials)
    if not user_id:
        return None

    try:
        return db.query(models.User).filter(models.User.id == user_id).first()
    except SQLAlchemyError:
        logger.exception("Error resolving user %s from token", user_id)
        return None


def require_user(user: Optional[models.User], detail: str = "Unauthorized - Please provide a valid token") -> models.User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    return user


def get_current_user(user: Optional[models.User] = Depends(get_optional_user)) -> models.User:
    """Dependency for routes that require a signed-in user."""
    return require_user(user)


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """Register a new user and sign them in."""
    try:
        db_user = db.query(models.User).filter(
            (models.User.email == user.email) | (models.User.username == user.username)
        ).first()
        if db_user:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

        new_user = models.User(
            id=models.generate_id("user"),
            username=user.username,
            email=user.email,
            password=hash_password(user.password),
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            allowed_languages=["en"]
        )

        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration error")
        raise HTTPException(status_code=500, detail="Registration failed")

    return {
        "user": new_user,
        "token": issue_token(new_user.id),
        "message": "Registration successful"
    }


@router.post("/login", response_model=schemas.AuthResponse)
def login(login_data: schemas.UserLogin, db: Session = Depends(get_db)):
    """Authenticates a user by email and password and returns a fresh token."""
    try:
        user = db.query(models.User).filter(models.User.email == login_data.email).first()
    except SQLAlchemyError:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail="Login failed")

    if not user or not verify_password(login_data.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return {
        "user": user,
        "token": issue_token(user.id),
        "message": "Login successful"
    }


@router.post("/logout", response_model=schemas.MessageResponse)
def logout():
    """Tokens are not tracked server-side; the client drops its copy."""
    return {"message": "Logout successful"}


@router.get("/user", response_model=schemas.CurrentUserResponse)
def read_current_user(user: Optional[models.User] = Depends(get_optional_user)):
    """Returns the signed-in user."""
    return {"user": require_user(user, "Not authenticated")}
