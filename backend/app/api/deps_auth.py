# backend/app/api/deps_auth.py

import logging
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.security import InvalidToken, PasswordHasher, TokenIssuer, TokenVerifier
from app.models.user import ROLES
from app.services import users as user_store

logger = logging.getLogger("authgate.auth")

# auto_error=False: we want our own 401 messages, not FastAPI's default one
bearer_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: int
    name: str
    email: str
    role: str  # "user" | "manager" | "admin"

    class Config:
        from_attributes = True
        frozen = True


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db),
) -> CurrentUser:
    # HTTPBearer yields None for a missing header or anything not "Bearer <token>"
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized, no token")

    try:
        user_id = verifier.subject(credentials.credentials)
    except InvalidToken:
        raise _unauthorized("Not authorized, token failed")

    user = user_store.find_by_id(db, user_id)
    if user is None:
        # token outlived its user
        raise _unauthorized("Not authorized, user not found")

    return CurrentUser.model_validate(user)


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    """Build a dependency that lets through only users whose role is in `roles`.

    Always runs after get_current_user, so the identity is resolved first and a
    missing or bad token is a 401 before any role is looked at.
    """
    unknown = set(roles) - set(ROLES)
    if not roles or unknown:
        raise ValueError(f"require_roles needs roles from {ROLES}, got {roles}")

    allowed = frozenset(roles)

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.info(
                "Denied user id=%s role=%s (allowed: %s)",
                user.id,
                user.role,
                ", ".join(sorted(allowed)),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {user.role} is not authorized to access this route",
            )
        return user

    return dependency
