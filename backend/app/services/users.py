# backend/app/services/users.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import PasswordHasher
from app.models.user import DEFAULT_ROLE, ROLES, User

logger = logging.getLogger("authgate.users")


class EmailAlreadyRegistered(Exception):
    pass


def find_by_email(db: Session, email: str) -> Optional[User]:
    if not email:
        return None
    return db.query(User).filter(User.email == email).first()


def find_by_id(db: Session, user_id) -> Optional[User]:
    try:
        return db.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


def list_all(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def create_user(
    db: Session,
    hasher: PasswordHasher,
    *,
    name: str,
    email: str,
    password: str,
    role: Optional[str] = None,
) -> User:
    role = role or DEFAULT_ROLE
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")

    if find_by_email(db, email) is not None:
        raise EmailAlreadyRegistered(email)

    user = User(
        name=name,
        email=email,
        role=role,
        password_hash=hasher.hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # lost a race with a concurrent registration of the same email
        db.rollback()
        raise EmailAlreadyRegistered(email) from e

    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate(db: Session, hasher: PasswordHasher, email: str, password: str) -> Optional[User]:
    """Return the user when email and password match, None otherwise.

    An unknown email still pays for one hash verification, so response time
    does not reveal which emails are registered.
    """
    user = find_by_email(db, email)
    if user is None:
        hasher.dummy_verify(password)
        return None
    if not hasher.verify(password, user.password_hash):
        return None
    return user


def set_password(db: Session, hasher: PasswordHasher, user: User, password: str) -> bool:
    """Re-hash only when the plaintext actually changed. Returns True if it did."""
    if hasher.verify(password, user.password_hash):
        return False
    user.password_hash = hasher.hash(password)
    db.commit()
    db.refresh(user)
    return True


def set_role(db: Session, user: User, role: str) -> User:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    if user.role != role:
        user.role = role
        db.commit()
        db.refresh(user)
    return user
