"""
Product catalogue contracts.

Defines the structure of catalog data exchanged with the remote catalog API, e.g.:
- Product records (list pages, detail view, create/update results)
- the create and partial-update request bodies
- the soft-delete acknowledgement

These contracts must be used by both:
- clients/mocks/local_product_catalogues.py (in-memory catalog for development/testing)
- clients/real_http/http_transport.py via services/catalog_service.py (remote catalog API)

Why:
- Wire payloads use camelCase keys; the rest of the code only sees snake_case attributes
- Records are immutable, so the store can only ever replace whole entities
- Prevents "guessing" payload formats in multiple places
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ProductCategory(str, Enum):
    BEAUTY = "beauty"
    FRAGRANCES = "fragrances"
    FURNITURE = "furniture"
    GROCERIES = "groceries"
    HOME_DECORATION = "home-decoration"
    KITCHEN_ACCESSORIES = "kitchen-accessories"
    LAPTOPS = "laptops"
    MENS_SHIRTS = "mens-shirts"
    MENS_SHOES = "mens-shoes"
    MENS_WATCHES = "mens-watches"
    MOBILE_ACCESSORIES = "mobile-accessories"
    MOTORCYCLE = "motorcycle"
    SKIN_CARE = "skin-care"
    SMARTPHONES = "smartphones"
    SPORTS_ACCESSORIES = "sports-accessories"
    SUNGLASSES = "sunglasses"
    TABLETS = "tablets"
    TOPS = "tops"
    VEHICLE = "vehicle"
    WOMENS_BAGS = "womens-bags"
    WOMENS_DRESSES = "womens-dresses"
    WOMENS_JEWELLERY = "womens-jewellery"
    WOMENS_SHOES = "womens-shoes"
    WOMENS_WATCHES = "womens-watches"


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------

class Product(BaseModel):
    """A catalog entity. `id` is always assigned by the remote system."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: int
    title: str
    description: str = ""
    price: float = Field(ge=0)
    discount_percentage: float = Field(default=0.0, ge=0, le=100, alias="discountPercentage")
    rating: float = Field(default=0.0, ge=0, le=5)
    stock: int = Field(default=0, ge=0)
    brand: str = ""                      # some remote categories (e.g. groceries) carry no brand
    category: str
    thumbnail: str = ""
    images: List[str] = Field(default_factory=list)
    is_deleted: Optional[bool] = Field(default=None, alias="isDeleted")
    deleted_on: Optional[datetime] = Field(default=None, alias="deletedOn")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class CreateProductInput(BaseModel):
    """Body for POST /products/add. Every Product field except the server-assigned id."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    discount_percentage: float = Field(default=0.0, ge=0, le=100, alias="discountPercentage")
    rating: float = Field(default=0.0, ge=0, le=5)
    stock: int = Field(ge=0)
    brand: str
    category: ProductCategory
    thumbnail: str = ""
    images: List[str] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProductUpdate(BaseModel):
    """Partial body for PUT /products/{id}. Only explicitly set fields are sent."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    discount_percentage: Optional[float] = Field(default=None, ge=0, le=100, alias="discountPercentage")
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    stock: Optional[int] = Field(default=None, ge=0)
    brand: Optional[str] = None
    category: Optional[ProductCategory] = None
    thumbnail: Optional[str] = None
    images: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ProductListResult(BaseModel):
    """
    A page of products.

    `skip` and `limit` are optional: list responses always report them, but the
    store never relies on them being present for search responses.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    products: List[Product] = Field(default_factory=list)
    total: int = Field(ge=0)
    skip: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _page_fits_limit(self) -> "ProductListResult":
        # limit=0 means "no limit" on the remote API
        if self.limit and len(self.products) > self.limit:
            raise ValueError(f"page holds {len(self.products)} products but limit is {self.limit}")
        return self


class DeleteResult(BaseModel):
    """Soft-delete acknowledgement. `id` is echoed by the caller, not read from the body."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    is_deleted: bool = Field(default=False, alias="isDeleted")
    deleted_on: Optional[datetime] = Field(default=None, alias="deletedOn")
