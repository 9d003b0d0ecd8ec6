"""Pydantic request/response schemas for the OrderFlow API."""

from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from orderflow.order.order import PaymentMethod

T = TypeVar("T")

SUCCESS_CODE = 1000


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope shared by every endpoint."""

    code: int = SUCCESS_CODE
    message: str = "Success"
    result: T | None = None


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Red Rose Bouquet",
                    "description": "Twelve long-stem red roses.",
                    "price": "49.90",
                    "stock_quantity": 25,
                    "category_id": "cat-bouquets",
                    "is_active": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    category_id: str | None = None
    is_active: bool = True


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Red Rose Bouquet (Large)",
                    "price": "59.90",
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    category_id: str | None = None


class SetProductActiveRequest(BaseModel):
    is_active: bool


class RestockProductRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class ProductIdResponse(BaseModel):
    product_id: str


# --- Cart Request Schemas ---


class AddCartItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "3f1c6f0e-2b0a-4a53-9a53-1c1f4d6f7e21",
                    "quantity": 2,
                }
            ]
        }
    }

    product_id: str
    quantity: int = Field(..., ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


# --- Order Request Schemas ---


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "12 Flower Street, Springfield",
                    "notes": "Please ring twice",
                    "payment_method": "COD",
                }
            ]
        }
    }

    shipping_address: str | None = None
    notes: str | None = None
    payment_method: PaymentMethod = PaymentMethod.COD


class UpdateOrderStatusRequest(BaseModel):
    status: str
