from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from app.core.database import Base

ROLES = ("user", "manager", "admin")
DEFAULT_ROLE = "user"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    # "user" | "manager" | "admin"
    role = Column(String, nullable=False, default=DEFAULT_ROLE)

    password_hash = Column(String, nullable=False)

    # timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
