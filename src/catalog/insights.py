"""
Dashboard aggregates over a page of products.

Pure functions only; the caller decides which page to summarize (the admin
dashboard lists the first DASHBOARD_PAGE_SIZE products and summarizes those).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from src.integrations.contracts.product_catalogues import Product

DASHBOARD_PAGE_SIZE = 100
TOP_BRANDS = 10
TOP_RATED = 5


@dataclass(frozen=True)
class CatalogSummary:
    category_counts: Tuple[Tuple[str, int], ...] = ()
    stock_by_brand: Tuple[Tuple[str, int], ...] = ()
    top_rated: Tuple[Product, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_counts": dict(self.category_counts),
            "stock_by_brand": dict(self.stock_by_brand),
            "top_rated": [p.to_payload() for p in self.top_rated],
        }


def summarize_products(products: Iterable[Product]) -> CatalogSummary:
    """
    Aggregate a page of products for the dashboard.

    - category_counts: products per category, in first-seen order
    - stock_by_brand: stock summed per brand, highest TOP_BRANDS first
      (brand-less records are grouped under "")
    - top_rated: TOP_RATED products by rating, highest first

    Ties keep page order.
    """
    products = list(products)

    categories: Dict[str, int] = {}
    brands: Dict[str, int] = {}
    for product in products:
        categories[product.category] = categories.get(product.category, 0) + 1
        brands[product.brand] = brands.get(product.brand, 0) + product.stock

    # sorted() is stable, so equal totals stay in first-seen order
    top_brands: List[Tuple[str, int]] = sorted(brands.items(), key=lambda item: item[1], reverse=True)[:TOP_BRANDS]
    top_rated = sorted(products, key=lambda p: p.rating, reverse=True)[:TOP_RATED]

    return CatalogSummary(
        category_counts=tuple(categories.items()),
        stock_by_brand=tuple(top_brands),
        top_rated=tuple(top_rated),
    )
