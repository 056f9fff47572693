"""
Database Schemas

MongoDB collection schemas for the Coffee Shop API, defined as Pydantic models.
These schemas validate incoming documents before they reach the database.

Collections:
- coffee_shop: coffee shops with their embedded product list

Products have no collection of their own; they live inside the shop document
and keep the order they were submitted in.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal

Category = Literal["coffee", "food", "drinks"]


class Product(BaseModel):
    """
    Embedded product entry (no collection of its own)
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., ge=0, description="Price")
    category: Category = Field(..., description="One of coffee, food, drinks")


class CoffeeShopCreate(BaseModel):
    """
    Coffee shop collection schema
    Collection name: "coffee_shop"
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Shop name")
    address: str = Field(..., min_length=1, description="Street address")
    rating: float = Field(..., ge=0, le=5, description="Rating from 0 to 5")
    products: List[Product] = Field(default_factory=list, description="Products in insertion order")
    favorite: bool = Field(False, description="Whether the shop is marked as favorite")


class CoffeeShop(CoffeeShopCreate):
    """Coffee shop as returned by the API, with the store-assigned id."""
    id: str = Field(..., description="Store-assigned identifier")


class FavoriteUpdate(BaseModel):
    favorite: bool


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[ErrorDetail]] = None
