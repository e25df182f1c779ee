"""
Integrations layer.
This package contains all code used to communicate with the remote product catalog API:
- Transport gateways (real HTTP via httpx, or a local in-memory mock)
- The catalog service that turns catalog operations into transport calls
- Contracts describing every request/response shape

Key rule:
- The synchronization store MUST NOT call the transport directly.
- The store calls CatalogClient (src/integrations/services/catalog_service.py).
- We use the MOCK transport during development and swap to the REAL_HTTP transport when
  a catalog API URL is configured.

Switching implementations:
- The selection of mock vs real transport happens in ONE place (src/api/dependencies.py).
"""

from .contracts.interfaces import TransportError, TransportGateway
from .contracts.product_catalogues import (
    CreateProductInput,
    DeleteResult,
    Product,
    ProductCategory,
    ProductListResult,
    ProductUpdate,
)
from .services.catalog_service import CatalogClient
from .services.response_wrappers import CatalogResponseError

__all__ = [
    # interfaces
    "TransportError", "TransportGateway",
    # catalog contracts
    "CreateProductInput", "DeleteResult", "Product", "ProductCategory",
    "ProductListResult", "ProductUpdate",
    # services
    "CatalogClient", "CatalogResponseError",
]
