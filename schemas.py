from collections.abc import Mapping
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from errors import ApiError

# orders.quantity is a 32-bit integer column
MAX_QUANTITY = 2**31 - 1


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class RequestModel(BaseModel):
    error_message: ClassVar[str] = "Invalid request"

    @classmethod
    def parse(cls, data):
        if not isinstance(data, Mapping):
            raise ApiError(cls.error_message, 400)
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ApiError(cls.error_message, 400) from e


class LoginIn(RequestModel):
    error_message: ClassVar[str] = "Username and password must be text"

    username: str = ""
    password: str = ""


class CategoryIn(RequestModel):
    error_message: ClassVar[str] = "Category name is required"

    name: str = Field(..., min_length=1)


class ProductForm(RequestModel):
    error_message: ClassVar[str] = "Product name and price are required"

    name: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)
    description: Optional[str] = None
    category_id: Optional[int] = None
    colors: Optional[str] = None
    sizes: Optional[str] = None

    @field_validator("price", "description", "category_id", "colors", "sizes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)


class OrderIn(RequestModel):
    error_message: ClassVar[str] = "Please fill in all required order fields"

    product_id: int = Field(..., gt=0)
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_address: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    customer_notes: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None

    @field_validator("customer_notes", "color", "size", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)
