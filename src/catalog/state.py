"""
Catalog synchronization state and its transitions.

Every function here is pure: it takes the current SynchronizationState and
returns a new one. Nothing is mutated in place, so a snapshot handed to a
reader can never change underneath it. CatalogStore is the only caller that
swaps the current snapshot for the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from src.integrations.contracts.product_catalogues import DeleteResult, Product, ProductListResult

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    LIST = "list"
    GET_ONE = "get_one"
    SEARCH = "search"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OperationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


# Used when a failure carries no message of its own.
DEFAULT_ERROR_MESSAGES: Dict[OperationKind, str] = {
    OperationKind.LIST: "Failed to fetch products",
    OperationKind.GET_ONE: "Failed to fetch product details",
    OperationKind.SEARCH: "Search failed",
    OperationKind.CREATE: "Failed to add product",
    OperationKind.UPDATE: "Failed to update product",
    OperationKind.DELETE: "Failed to delete product",
}

DEFAULT_PAGE_SIZE = 10


def _idle_operations() -> Mapping[OperationKind, OperationStatus]:
    return MappingProxyType({kind: OperationStatus.IDLE for kind in OperationKind})


@dataclass(frozen=True)
class SynchronizationState:
    """
    Client-side catalog state.

    `products` is the current page only; a new list/search response replaces it.
    `product` is the single record shown by the detail view, independent of `products`.
    `is_loading` and `error` are shared by all operation kinds: with overlapping
    operations the last one to settle decides them. `operations` records the last
    status of each kind separately.
    """

    products: Tuple[Product, ...] = ()
    product: Optional[Product] = None
    is_loading: bool = False
    error: Optional[str] = None
    total: int = 0
    skip: int = 0
    limit: int = DEFAULT_PAGE_SIZE
    operations: Mapping[OperationKind, OperationStatus] = field(default_factory=_idle_operations)

    def status_of(self, kind: OperationKind) -> OperationStatus:
        return self.operations[kind]

    def find_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "products": [p.to_payload() for p in self.products],
            "product": self.product.to_payload() if self.product else None,
            "is_loading": self.is_loading,
            "error": self.error,
            "total": self.total,
            "skip": self.skip,
            "limit": self.limit,
            "operations": {kind.value: status.value for kind, status in self.operations.items()},
        }


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def apply_pending(state: SynchronizationState, kind: OperationKind) -> SynchronizationState:
    return replace(
        state,
        is_loading=True,
        error=None,
        operations=_with_status(state, kind, OperationStatus.PENDING),
    )


def apply_fulfilled(state: SynchronizationState, kind: OperationKind, payload: Any) -> SynchronizationState:
    updated = _FULFILLED[kind](state, payload)
    return replace(
        updated,
        is_loading=False,
        operations=_with_status(state, kind, OperationStatus.FULFILLED),
    )


def apply_rejected(state: SynchronizationState, kind: OperationKind, message: str) -> SynchronizationState:
    return replace(
        state,
        is_loading=False,
        error=message,
        operations=_with_status(state, kind, OperationStatus.REJECTED),
    )


def clear_error(state: SynchronizationState) -> SynchronizationState:
    return replace(state, error=None)


def clear_product(state: SynchronizationState) -> SynchronizationState:
    return replace(state, product=None)


# --- Per-operation cache updates --------------------------------------------

def _list_fulfilled(state: SynchronizationState, result: ProductListResult) -> SynchronizationState:
    return replace(
        state,
        products=tuple(result.products),
        total=result.total,
        skip=result.skip if result.skip is not None else state.skip,
        limit=result.limit if result.limit is not None else state.limit,
    )


def _get_one_fulfilled(state: SynchronizationState, product: Product) -> SynchronizationState:
    return replace(state, product=product)


def _search_fulfilled(state: SynchronizationState, result: ProductListResult) -> SynchronizationState:
    # skip/limit keep the values of the last list response
    return replace(state, products=tuple(result.products), total=result.total)


def _create_fulfilled(state: SynchronizationState, product: Product) -> SynchronizationState:
    # Appended to the current page as-is; total is not adjusted.
    return replace(state, products=state.products + (product,))


def _update_fulfilled(state: SynchronizationState, product: Product) -> SynchronizationState:
    products = state.products
    if state.find_product(product.id) is not None:
        products = tuple(product if p.id == product.id else p for p in state.products)
    else:
        logger.warning("Updated product id=%s is not on the current page; list left unchanged", product.id)

    current = state.product
    if current is not None and current.id == product.id:
        current = product
    return replace(state, products=products, product=current)


def _delete_fulfilled(state: SynchronizationState, result: DeleteResult) -> SynchronizationState:
    if not result.is_deleted:
        logger.warning("Catalog declined delete of product id=%s; cache left unchanged", result.id)
        return state

    # total is not adjusted
    products = tuple(p for p in state.products if p.id != result.id)
    current = state.product
    if current is not None and current.id == result.id:
        current = None
    return replace(state, products=products, product=current)


_FULFILLED: Dict[OperationKind, Callable[[SynchronizationState, Any], SynchronizationState]] = {
    OperationKind.LIST: _list_fulfilled,
    OperationKind.GET_ONE: _get_one_fulfilled,
    OperationKind.SEARCH: _search_fulfilled,
    OperationKind.CREATE: _create_fulfilled,
    OperationKind.UPDATE: _update_fulfilled,
    OperationKind.DELETE: _delete_fulfilled,
}


def _with_status(
    state: SynchronizationState, kind: OperationKind, status: OperationStatus
) -> Mapping[OperationKind, OperationStatus]:
    operations = dict(state.operations)
    operations[kind] = status
    return MappingProxyType(operations)
