from sqlalchemy import (
    Column,
    Integer,
    Float,
    String,
    DateTime,
    ForeignKey,
    Index,
)
from datetime import datetime
from app.core.database import Base


class Product(Base):
    __tablename__ = "products"

    __table_args__ = (
        Index("ix_products_created_by", "created_by"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)

    # provenance, set once at creation
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    # timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
