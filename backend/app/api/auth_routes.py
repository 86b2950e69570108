# backend/app/api/auth_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps_auth import (
    get_db,
    get_password_hasher,
    get_settings_dep,
    get_token_issuer,
)
from app.api.schemas import LoginIn, LoginOut, RegisterIn, UserOut, UserResponse
from app.core.config import Settings
from app.core.security import PasswordHasher, TokenIssuer
from app.models.user import DEFAULT_ROLE
from app.services import users as user_store

logger = logging.getLogger("authgate.auth")

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings_dep),
):
    name = (payload.name or "").strip()
    email = (payload.email or "").strip()
    password = payload.password or ""

    if not name or not email or not password:
        raise HTTPException(status_code=400, detail="Please provide name, email and password")

    role = payload.role or DEFAULT_ROLE
    if role != DEFAULT_ROLE and not settings.allow_role_self_assignment:
        raise HTTPException(status_code=403, detail=f"Cannot self-assign role {role}")

    if user_store.find_by_email(db, email) is not None:
        raise HTTPException(status_code=409, detail="User already exists")

    try:
        user = user_store.create_user(
            db,
            hasher,
            name=name,
            email=email,
            password=password,
            role=role,
        )
    except user_store.EmailAlreadyRegistered:
        raise HTTPException(status_code=409, detail="User already exists")

    return UserResponse(
        message="User registered successfully",
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    email = (payload.email or "").strip()
    password = payload.password or ""

    if not email or not password:
        raise HTTPException(status_code=400, detail="Please provide email and password")

    # same answer for unknown email and wrong password
    user = user_store.authenticate(db, hasher, email, password)
    if user is None:
        logger.info("Failed login for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = issuer.issue(user.id)
    logger.info("User id=%s logged in", user.id)

    return LoginOut(message="Login successful", token=token)
