# backend/app/api/schemas.py

from datetime import datetime
from typing import List, Literal, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AliasChoices, BaseModel, Field, field_validator

Role = Literal["user", "manager", "admin"]


# ---------- USERS ----------

class UserOut(BaseModel):
    """Public projection of a user. The password hash never leaves the store."""

    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class RegisterIn(BaseModel):
    # all optional so a missing field is our 400, not a schema error
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: Optional[str]) -> Optional[str]:
        # check the shape only; the stored email is what the client typed, so login matches it
        if not v or not v.strip():
            return v
        v = v.strip()
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e
        return v


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginOut(BaseModel):
    message: str
    token: str


class UserResponse(BaseModel):
    message: str
    user: UserOut


class UserListResponse(BaseModel):
    message: str
    count: int
    users: List[UserOut]


# ---------- PRODUCTS ----------

class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    # read from the ORM by attribute name, written to clients in camelCase
    created_by: int = Field(
        validation_alias=AliasChoices("created_by", "createdBy"),
        serialization_alias="createdBy",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    name: Optional[str] = None
    # inf and NaN parse as floats but are not prices
    price: Optional[float] = Field(default=None, allow_inf_nan=False)


class ProductResponse(BaseModel):
    message: str
    product: ProductOut


class ProductListResponse(BaseModel):
    message: str
    count: int
    products: List[ProductOut]
