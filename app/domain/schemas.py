# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    # strict: bez zamiany true/"2"/2.0 na int
    product_id: int = Field(..., gt=0, strict=True, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., gt=0, strict=True, description="Ilosc produktu (musi byc > 0)")


class CartLineOut(BaseModel):
    """Linia koszyka ze snapshotem ceny."""

    id: int
    cart_id: int
    product_id: int
    name: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class AddToCartOut(BaseModel):
    cart_id: int
    line: CartLineOut


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    status: str
    lines: List[CartLineOut]
    total: Decimal


class SaleOut(BaseModel):
    """Paragon zwracany przez checkout."""

    id: int
    user_id: int
    cart_id: int
    total_price: Decimal
    sale_date: datetime
    line_count: int


class ProfileSaleOut(BaseModel):
    id: int
    user_id: int
    cart_id: int
    total_price: Decimal
    sale_date: datetime
    lines: List[CartLineOut]


class ProfileOut(BaseModel):
    user_id: int
    username: str
    email: str
    sales: List[ProfileSaleOut]
    cart_id: int | None = None
    cart: List[CartLineOut]


class RegisterIn(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=72, description="bcrypt bierze max 72 bajty")


class LoginIn(BaseModel):
    username: str
    password: str


class UserRead(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: int
    username: str
    email: str


class RegisterOut(BaseModel):
    message: str
    user: UserRead


class LoginOut(BaseModel):
    message: str
    token: str
    user: UserRead


class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
