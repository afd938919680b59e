from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, Union
from decimal import Decimal


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ProductFilters(BaseModel):
    """Optional filters accepted by GET /products. Blank values count as absent."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    category_id: Optional[int] = None
    shop_id: Optional[str] = None
    name: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_absent(cls, value):
        return _blank_to_none(value)


class ProductUpsertRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    shop_id: Optional[str] = None
    product_id: Optional[Union[int, str]] = None
    image_url: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    openid: Optional[str] = None

    @field_validator("product_id", "category_id", mode="before")
    @classmethod
    def blank_id_as_absent(cls, value):
        return _blank_to_none(value)


class ProductUpsertResponse(BaseModel):
    id: Union[int, str]
    message: str


class MessageResponse(BaseModel):
    message: str
