"""
Catalog Service for the remote product catalog API.

This module translates catalog operations into transport gateway calls.
Includes:
- Path and query construction for each operation
- Request body serialization via the catalog contracts
- Response normalization into Product / ProductListResult / DeleteResult

The service holds no state and never touches the store's cache.
Transport errors propagate unchanged to the caller.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from src.integrations.contracts.interfaces import TransportGateway
from src.integrations.contracts.product_catalogues import (
    CreateProductInput,
    DeleteResult,
    Product,
    ProductListResult,
    ProductUpdate,
)
from src.integrations.services.response_wrappers import (
    normalize_delete_result,
    normalize_product,
    normalize_product_list,
)

logger = logging.getLogger(__name__)


class CatalogClient:
    def __init__(self, transport: TransportGateway):
        self.transport = transport

    async def list_products(
        self,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> ProductListResult:
        query: Dict[str, Any] = {}
        if limit is not None:
            query["limit"] = limit
        if skip is not None:
            query["skip"] = skip

        logger.debug("Listing products: %s", query)
        raw = await self.transport.get("/products", query or None)
        return normalize_product_list(raw, requested_limit=limit)

    async def get_product(self, product_id: int) -> Product:
        raw = await self.transport.get(f"/products/{product_id}")
        return normalize_product(raw)

    async def search_products(self, query: str) -> ProductListResult:
        logger.debug("Searching products: q=%r", query)
        raw = await self.transport.get("/products/search", {"q": query})
        return normalize_product_list(raw)

    async def create_product(self, product: Union[CreateProductInput, Mapping[str, Any]]) -> Product:
        if not isinstance(product, CreateProductInput):
            product = CreateProductInput.model_validate(product)
        raw = await self.transport.post("/products/add", product.to_payload())
        created = normalize_product(raw)
        logger.info("Product created by catalog API: id=%s", created.id)
        return created

    async def update_product(self, product_id: int, update: Union[ProductUpdate, Mapping[str, Any]]) -> Product:
        if not isinstance(update, ProductUpdate):
            update = ProductUpdate.model_validate(update)
        if update.is_empty():
            raise ValueError("Product update must set at least one field.")
        raw = await self.transport.put(f"/products/{product_id}", update.to_payload())
        return normalize_product(raw)

    async def delete_product(self, product_id: int) -> DeleteResult:
        raw = await self.transport.delete(f"/products/{product_id}")
        return normalize_delete_result(raw, product_id=product_id)
