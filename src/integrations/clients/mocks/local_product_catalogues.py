"""
Local Product Catalogue Transport (Mock/Local).

⚠️  This is a mock transport for development and testing.
    It answers the same paths as the remote catalog API from an in-memory
    catalog and never opens a network connection.

Behaviour mirrors the public demo catalog API:
- GET  /products?limit&skip     paged list (limit=0 returns everything)
- GET  /products/search?q=      case-insensitive match on title/description/brand/category
- GET  /products/{id}           single record, 404 when unknown
- POST /products/add            echoes the body with a new id (not persisted by default)
- PUT  /products/{id}           full record merged with the body (not persisted by default)
- DELETE /products/{id}         record with isDeleted/deletedOn (not persisted by default)

Swap:
Replace with clients/real_http/http_transport.py once a catalog API URL is configured.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from src.integrations.contracts.interfaces import TransportError, TransportGateway

logger = logging.getLogger(__name__)

_DEFAULT_PAGE_SIZE = 30
_PRODUCT_PATH = re.compile(r"^/products/(\d+)$")


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Essence Mascara Lash Princess",
        "description": "Popular mascara known for its volumizing and lengthening effects.",
        "price": 9.99,
        "discountPercentage": 7.17,
        "rating": 4.94,
        "stock": 5,
        "brand": "Essence",
        "category": "beauty",
        "thumbnail": "https://cdn.example.com/products/beauty/mascara/thumbnail.png",
        "images": ["https://cdn.example.com/products/beauty/mascara/1.png"],
    },
    {
        "id": 2,
        "title": "Eyeshadow Palette with Mirror",
        "description": "Versatile range of eyeshadow shades with a built-in mirror.",
        "price": 19.99,
        "discountPercentage": 5.5,
        "rating": 3.28,
        "stock": 44,
        "brand": "Glamour Beauty",
        "category": "beauty",
        "thumbnail": "https://cdn.example.com/products/beauty/eyeshadow/thumbnail.png",
        "images": ["https://cdn.example.com/products/beauty/eyeshadow/1.png"],
    },
    {
        "id": 3,
        "title": "Powder Canister",
        "description": "Finely milled setting powder for a matte finish.",
        "price": 14.99,
        "discountPercentage": 18.14,
        "rating": 3.82,
        "stock": 59,
        "brand": "Velvet Touch",
        "category": "beauty",
        "thumbnail": "https://cdn.example.com/products/beauty/powder/thumbnail.png",
        "images": ["https://cdn.example.com/products/beauty/powder/1.png"],
    },
    {
        "id": 4,
        "title": "Calvin Klein CK One",
        "description": "Classic unisex fragrance with a fresh citrus top note.",
        "price": 49.99,
        "discountPercentage": 0.32,
        "rating": 4.85,
        "stock": 17,
        "brand": "Calvin Klein",
        "category": "fragrances",
        "thumbnail": "https://cdn.example.com/products/fragrances/ck-one/thumbnail.png",
        "images": [
            "https://cdn.example.com/products/fragrances/ck-one/1.png",
            "https://cdn.example.com/products/fragrances/ck-one/2.png",
        ],
    },
    {
        "id": 5,
        "title": "Annibale Colombo Bed",
        "description": "Luxurious bed crafted with high-quality materials.",
        "price": 1899.99,
        "discountPercentage": 0.29,
        "rating": 4.14,
        "stock": 47,
        "brand": "Annibale Colombo",
        "category": "furniture",
        "thumbnail": "https://cdn.example.com/products/furniture/bed/thumbnail.png",
        "images": ["https://cdn.example.com/products/furniture/bed/1.png"],
    },
    {
        "id": 6,
        "title": "Wooden Bathroom Sink With Mirror",
        "description": "Stylish wooden sink with an integrated mirror.",
        "price": 799.99,
        "discountPercentage": 8.8,
        "rating": 3.59,
        "stock": 7,
        "brand": "Bath Trends",
        "category": "furniture",
        "thumbnail": "https://cdn.example.com/products/furniture/sink/thumbnail.png",
        "images": ["https://cdn.example.com/products/furniture/sink/1.png"],
    },
    {
        "id": 7,
        "title": "Apple",
        "description": "Fresh and crisp apples, perfect for snacking.",
        "price": 1.99,
        "discountPercentage": 1.97,
        "rating": 2.96,
        "stock": 9,
        "category": "groceries",
        "thumbnail": "https://cdn.example.com/products/groceries/apple/thumbnail.png",
        "images": ["https://cdn.example.com/products/groceries/apple/1.png"],
    },
    {
        "id": 8,
        "title": "Decoration Swing",
        "description": "Charming hanging swing for indoor or outdoor decoration.",
        "price": 59.99,
        "discountPercentage": 3.19,
        "rating": 3.16,
        "stock": 47,
        "brand": "Home Accents",
        "category": "home-decoration",
        "thumbnail": "https://cdn.example.com/products/home-decoration/swing/thumbnail.png",
        "images": ["https://cdn.example.com/products/home-decoration/swing/1.png"],
    },
    {
        "id": 9,
        "title": "Bamboo Spatula",
        "description": "Heat-resistant bamboo spatula for non-stick cookware.",
        "price": 7.99,
        "discountPercentage": 13.36,
        "rating": 3.27,
        "stock": 37,
        "brand": "Kitchen Basics",
        "category": "kitchen-accessories",
        "thumbnail": "https://cdn.example.com/products/kitchen/spatula/thumbnail.png",
        "images": ["https://cdn.example.com/products/kitchen/spatula/1.png"],
    },
    {
        "id": 10,
        "title": "Apple MacBook Pro 14 Inch Space Grey",
        "description": "Powerful laptop with the M-series chip and a Liquid Retina display.",
        "price": 1999.99,
        "discountPercentage": 9.3,
        "rating": 3.65,
        "stock": 24,
        "brand": "Apple",
        "category": "laptops",
        "thumbnail": "https://cdn.example.com/products/laptops/macbook-pro/thumbnail.png",
        "images": ["https://cdn.example.com/products/laptops/macbook-pro/1.png"],
    },
    {
        "id": 11,
        "title": "iPhone 13 Pro",
        "description": "Smartphone with a ProMotion display and triple camera system.",
        "price": 1099.99,
        "discountPercentage": 9.14,
        "rating": 4.12,
        "stock": 56,
        "brand": "Apple",
        "category": "smartphones",
        "thumbnail": "https://cdn.example.com/products/smartphones/iphone-13-pro/thumbnail.png",
        "images": ["https://cdn.example.com/products/smartphones/iphone-13-pro/1.png"],
    },
    {
        "id": 12,
        "title": "Rolex Submariner Watch",
        "description": "Iconic dive watch with a unidirectional rotating bezel.",
        "price": 13999.99,
        "discountPercentage": 3.4,
        "rating": 4.66,
        "stock": 3,
        "brand": "Rolex",
        "category": "mens-watches",
        "thumbnail": "https://cdn.example.com/products/mens-watches/submariner/thumbnail.png",
        "images": ["https://cdn.example.com/products/mens-watches/submariner/1.png"],
    },
]


# ---------------------------------------------------------------------------
# Mock transport
# ---------------------------------------------------------------------------

class LocalCatalogTransport(TransportGateway):
    """
    In-memory catalog transport.

    Parameters
    ----------
    products : list of dict, optional
        Wire-format product records to seed the catalog with. Defaults to a small sample catalog.
    persist_writes : bool
        If True, add/update/delete change the in-memory catalog. Default False, matching
        the demo API which only simulates writes.
    decline_deletes : bool
        If True, DELETE answers `isDeleted: false` without raising. Default False.
    latency_seconds : float
        Delay applied before every response, to exercise overlapping requests. Default 0.
    """

    def __init__(
        self,
        products: Optional[List[Dict[str, Any]]] = None,
        persist_writes: bool = False,
        decline_deletes: bool = False,
        latency_seconds: float = 0.0,
    ):
        seed = _SEED_PRODUCTS if products is None else products
        # In-memory store (reset on restart)
        self._products: Dict[int, Dict[str, Any]] = {int(p["id"]): copy.deepcopy(p) for p in seed}
        self._persist_writes = persist_writes
        self._decline_deletes = decline_deletes
        self._latency_seconds = latency_seconds
        self._next_id = max(self._products, default=0) + 1
        self._pending_failures: List[TransportError] = []
        self.requests: List[Dict[str, Any]] = []

        logger.info("[CATALOG MOCK] Transport initialised with %d products", len(self._products))

    # ------------------------------------------------------------------
    # Failure injection
    # ------------------------------------------------------------------

    def fail_next(self, message: Optional[str] = None, status_code: Optional[int] = 500) -> None:
        """Make the next request raise a TransportError with the given message."""
        self._pending_failures.append(TransportError(message, status_code=status_code))

    # ------------------------------------------------------------------
    # TransportGateway
    # ------------------------------------------------------------------

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        await self._before("GET", path, query)
        query = query or {}

        if path == "/products":
            return self._page(list(self._products.values()), query.get("limit"), query.get("skip"))
        if path == "/products/search":
            needle = str(query.get("q", "")).strip().lower()
            matches = [p for p in self._products.values() if _matches(p, needle)]
            return self._page(matches, query.get("limit", 0), query.get("skip"))

        return copy.deepcopy(self._get_record(path))

    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        await self._before("POST", path, body)
        if path != "/products/add":
            raise TransportError(f"Route '{path}' not found", status_code=404)

        created = {"id": self._next_id, **copy.deepcopy(body)}
        self._next_id += 1
        if self._persist_writes:
            self._products[created["id"]] = created
        logger.info("[CATALOG MOCK] Product added id=%s title=%s", created["id"], created.get("title"))
        return copy.deepcopy(created)

    async def put(self, path: str, body: Dict[str, Any]) -> Any:
        await self._before("PUT", path, body)
        record = self._get_record(path)

        merged = {**copy.deepcopy(record), **copy.deepcopy(body), "id": record["id"]}
        if self._persist_writes:
            self._products[record["id"]] = merged
        logger.info("[CATALOG MOCK] Product updated id=%s fields=%s", record["id"], list(body.keys()))
        return copy.deepcopy(merged)

    async def delete(self, path: str) -> Any:
        await self._before("DELETE", path, None)
        record = self._get_record(path)

        if self._decline_deletes:
            logger.info("[CATALOG MOCK] Delete declined id=%s", record["id"])
            return {**copy.deepcopy(record), "isDeleted": False}

        if self._persist_writes:
            del self._products[record["id"]]
        logger.info("[CATALOG MOCK] Product deleted id=%s", record["id"])
        return {
            **copy.deepcopy(record),
            "isDeleted": True,
            "deletedOn": datetime.now(timezone.utc).isoformat(),
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _before(self, method: str, path: str, payload: Any) -> None:
        self.requests.append({"method": method, "path": path, "payload": payload})
        if self._latency_seconds:
            await asyncio.sleep(self._latency_seconds)
        if self._pending_failures:
            raise self._pending_failures.pop(0)

    def _get_record(self, path: str) -> Dict[str, Any]:
        match = _PRODUCT_PATH.match(path)
        if not match:
            raise TransportError(f"Route '{path}' not found", status_code=404)
        product_id = int(match.group(1))
        record = self._products.get(product_id)
        if record is None:
            raise TransportError(f"Product with id '{product_id}' not found", status_code=404)
        return record

    def _page(self, items: List[Dict[str, Any]], limit: Any, skip: Any) -> Dict[str, Any]:
        limit = _DEFAULT_PAGE_SIZE if limit is None else int(limit)
        skip = 0 if skip is None else int(skip)
        ordered = sorted(items, key=lambda p: p["id"])
        page = ordered[skip:] if limit == 0 else ordered[skip:skip + limit]
        return {
            "products": copy.deepcopy(page),
            "total": len(ordered),
            "skip": skip,
            "limit": limit if limit else len(page),
        }


def _matches(product: Dict[str, Any], needle: str) -> bool:
    if not needle:
        return True
    haystack = " ".join(
        str(product.get(field, "")) for field in ("title", "description", "brand", "category")
    ).lower()
    return needle in haystack
