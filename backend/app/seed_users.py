# backend/app/seed_users.py

import logging
import os

from app.core.config import get_settings
from app.core.database import Base, make_engine, make_session_factory
from app.core.security import PasswordHasher
from app.services import users as user_store

# register tables on Base.metadata
from app.models import product, user  # noqa: F401

logger = logging.getLogger("authgate.seed")


def seed_admin(session_factory, hasher: PasswordHasher, *, email: str, password: str, name: str = "Admin"):
    """Create the admin account, or bring an existing one back to admin with this password."""
    db = session_factory()
    try:
        existing = user_store.find_by_email(db, email)
        if existing is None:
            u = user_store.create_user(db, hasher, name=name, email=email, password=password, role="admin")
            logger.info("Created admin %s (id=%s)", email, u.id)
            return u.id, True

        changed = user_store.set_password(db, hasher, existing, password)
        user_store.set_role(db, existing, "admin")
        logger.info("Refreshed admin %s (id=%s, password changed=%s)", email, existing.id, changed)
        return existing.id, False
    finally:
        db.close()


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s %(message)s")

    engine = make_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    # Change these creds anytime (local dev defaults)
    email = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("SEED_ADMIN_PASSWORD", "admin123")

    seed_admin(
        make_session_factory(engine),
        PasswordHasher(rounds=settings.password_hash_rounds),
        email=email,
        password=password,
    )
    engine.dispose()


if __name__ == "__main__":
    main()
