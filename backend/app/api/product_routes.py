# backend/app/api/product_routes.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps_auth import CurrentUser, get_db, require_roles
from app.api.schemas import (
    ProductCreate,
    ProductListResponse,
    ProductOut,
    ProductResponse,
)
from app.services import products as product_store

router = APIRouter()


# ---------- PRODUCTS (public read) ----------

@router.get("", response_model=ProductListResponse)
def list_products(db: Session = Depends(get_db)):
    products = [ProductOut.model_validate(p) for p in product_store.list_products(db)]
    return ProductListResponse(
        message="Products fetched successfully",
        count=len(products),
        products=products,
    )


# ---------- PRODUCTS (admin + manager can create) ----------

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_roles("admin", "manager")),
):
    name = (payload.name or "").strip()
    # only a missing price is rejected; 0 is a valid price (free items)
    if not name or payload.price is None:
        raise HTTPException(status_code=400, detail="Please add name and price")

    try:
        p = product_store.create_product(db, name=name, price=payload.price, created_by=user.id)
    except product_store.UnknownCreator:
        raise HTTPException(status_code=400, detail="Creator does not exist")

    return ProductResponse(
        message="Product created successfully",
        product=ProductOut.model_validate(p),
    )


# ---------- PRODUCTS (admin only can delete) ----------

@router.delete("/{product_id}", response_model=ProductResponse)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_roles("admin")),
):
    # ids that can't exist are just "not found"
    p = product_store.get_product(db, product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")

    snapshot = ProductOut.model_validate(p)
    product_store.delete_product(db, p)

    return ProductResponse(message="Product deleted successfully", product=snapshot)
