# backend/app/core/security.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

logger = logging.getLogger("authgate.security")

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


class InvalidToken(ValueError):
    """Token is malformed, tampered with, signed with another key, or expired."""


class PasswordHasher:
    """Salted pbkdf2_sha256 hashing; the salt and round count live inside the hash string."""

    def __init__(self, rounds: int = 29000):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__rounds=rounds,
        )
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # unrecognised or corrupted hash string
            return False

    def dummy_verify(self, plain_password: str) -> bool:
        """Burn the same CPU as a real check so unknown emails are not faster to reject."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("authgate-timing-dummy")
        self.verify(plain_password, self._dummy_hash)
        return False


class TokenIssuer:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_delta: timedelta = DEFAULT_TOKEN_LIFETIME,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, user_id: Any, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)


class TokenVerifier:
    def __init__(self, secret_key: str, algorithm: str = DEFAULT_ALGORITHM):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str) -> dict[str, Any]:
        """Return the claims of a valid token or raise InvalidToken.

        Only the configured algorithm is accepted, so an unsigned ("none") or
        differently-signed token never decodes.
        """
        if not token or not isinstance(token, str):
            raise InvalidToken("Empty token")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidToken("Invalid token") from e

        sub = payload.get("sub")
        if not sub or not str(sub).strip():
            raise InvalidToken("Token has no subject")

        return payload

    def subject(self, token: str) -> str:
        return str(self.verify(token)["sub"])
