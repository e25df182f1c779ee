from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_catalog_store
from src.catalog.insights import DASHBOARD_PAGE_SIZE, summarize_products
from src.catalog.store import CatalogStore
from src.integrations.contracts.product_catalogues import CreateProductInput, ProductUpdate

api = APIRouter()
catalog_api = api


class ListProductsRequest(BaseModel):
    limit: Optional[int] = Field(default=None, ge=0, description="Page size; 0 asks for every product")
    skip: Optional[int] = Field(default=None, ge=0, description="Offset of the first product in the page")


class SearchProductsRequest(BaseModel):
    query: str = Field(..., description="Free-text search query")


@api.get("/state", tags=["Catalog"])
async def get_state(store: CatalogStore = Depends(get_catalog_store)) -> Dict[str, Any]:
    """Current synchronization state snapshot."""
    return store.state.to_dict()


@api.post("/products/list", tags=["Catalog"])
async def list_products(request: ListProductsRequest, store: CatalogStore = Depends(get_catalog_store)):
    await store.list_products(limit=request.limit, skip=request.skip)
    return store.state.to_dict()


@api.post("/products/search", tags=["Catalog"])
async def search_products(request: SearchProductsRequest, store: CatalogStore = Depends(get_catalog_store)):
    """A blank query goes back to the first page of the plain list."""
    if request.query.strip():
        await store.search_products(request.query)
    else:
        await store.list_products(limit=store.state.limit, skip=0)
    return store.state.to_dict()


@api.get("/dashboard", tags=["Catalog"])
async def get_dashboard(store: CatalogStore = Depends(get_catalog_store)) -> Dict[str, Any]:
    """Lists the first DASHBOARD_PAGE_SIZE products and returns their aggregates with the snapshot."""
    await store.list_products(limit=DASHBOARD_PAGE_SIZE)
    state = store.state
    return {"summary": summarize_products(state.products).to_dict(), "state": state.to_dict()}


@api.get("/products/{product_id}", tags=["Catalog"])
async def get_product(product_id: int, store: CatalogStore = Depends(get_catalog_store)):
    await store.get_product(product_id)
    return store.state.to_dict()


@api.post("/products", tags=["Catalog"])
async def create_product(product: CreateProductInput, store: CatalogStore = Depends(get_catalog_store)):
    await store.create_product(product)
    return store.state.to_dict()


@api.put("/products/{product_id}", tags=["Catalog"])
async def update_product(product_id: int, update: ProductUpdate, store: CatalogStore = Depends(get_catalog_store)):
    if update.is_empty():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Product update must set at least one field.",
        )
    await store.update_product(product_id, update)
    return store.state.to_dict()


@api.delete("/products/{product_id}", tags=["Catalog"])
async def delete_product(product_id: int, store: CatalogStore = Depends(get_catalog_store)):
    await store.delete_product(product_id)
    return store.state.to_dict()


@api.post("/error/clear", tags=["Catalog"])
async def clear_error(store: CatalogStore = Depends(get_catalog_store)):
    store.clear_error()
    return store.state.to_dict()


@api.post("/product/clear", tags=["Catalog"])
async def clear_product(store: CatalogStore = Depends(get_catalog_store)):
    """Called when the detail view is torn down."""
    store.clear_product()
    return store.state.to_dict()
