"""
Pydantic models for serializing orders and products.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductInfo(BaseModel):
    """Serialized view of a stored product."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="Product identifier")
    name: str = Field(description="Product name")
    price: Decimal = Field(description="Product price")
    order_id: Optional[int] = Field(
        None, description="Identifier of the owning order, if any"
    )


class OrderInfo(BaseModel):
    """Serialized view of a stored order and its products."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="Order identifier")
    customer_name: str = Field(description="Customer's name")
    total: Decimal = Field(description="Order total as recorded, not recomputed")
    products: List[ProductInfo] = Field(
        default_factory=list, description="Products owned by the order"
    )


class PageInfo(BaseModel):
    """One page of serialized orders or products."""

    content: List[dict] = Field(default_factory=list, description="Page items")
    page: int = Field(description="Zero-based page index")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Number of stored items")
    total_pages: int = Field(description="Number of pages at this size")
