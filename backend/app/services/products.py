# backend/app/services/products.py

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.product import Product
from app.models.user import User

logger = logging.getLogger("authgate.products")


class UnknownCreator(Exception):
    pass


def list_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.id).all()


def get_product(db: Session, product_id) -> Optional[Product]:
    try:
        return db.get(Product, int(product_id))
    except (TypeError, ValueError):
        return None


def create_product(db: Session, *, name: str, price: float, created_by: int) -> Product:
    # created_by is only checked here; later user changes don't touch products
    if db.get(User, created_by) is None:
        raise UnknownCreator(created_by)

    p = Product(name=name.strip(), price=price, created_by=created_by)
    db.add(p)
    db.commit()
    db.refresh(p)

    logger.info("Product id=%s created by user id=%s", p.id, created_by)
    return p


def delete_product(db: Session, p: Product) -> None:
    # attributes expire on commit, so read what we log first
    product_id = p.id
    db.delete(p)
    db.commit()
    logger.info("Product id=%s deleted", product_id)
