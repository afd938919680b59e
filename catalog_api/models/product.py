from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint
from typing import Optional
from decimal import Decimal


class ProductBase(SQLModel):
    shop_id: Optional[str] = Field(default=None, index=True)
    image_url: Optional[str] = None
    name: str = Field(index=True, nullable=False)
    price: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    description: Optional[str] = None
    category_id: Optional[int] = Field(default=None, index=True)
    openid: Optional[str] = Field(default=None, index=True)


class Product(ProductBase, table=True):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    product_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        nullable=False
    )


# Columns written by an upsert, in statement order
PRODUCT_WRITE_FIELDS = (
    "shop_id",
    "image_url",
    "name",
    "price",
    "description",
    "category_id",
    "openid",
)
