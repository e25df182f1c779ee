"""
Catalog synchronization store.

Holds the single SynchronizationState for the process and runs every catalog
operation through the same lifecycle:

    idle -> pending -> fulfilled | rejected

The cache is updated exactly once per operation, after the catalog API has
answered. Failures never escape an intent: they settle the operation as
rejected and populate `error`.
"""

import asyncio
import itertools
import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from src.catalog.state import (
    DEFAULT_ERROR_MESSAGES,
    DEFAULT_PAGE_SIZE,
    OperationKind,
    SynchronizationState,
    apply_fulfilled,
    apply_pending,
    apply_rejected,
    clear_error,
    clear_product,
)
from src.integrations.contracts.interfaces import TransportError
from src.integrations.contracts.product_catalogues import (
    CreateProductInput,
    DeleteResult,
    Product,
    ProductListResult,
    ProductUpdate,
)
from src.integrations.services.catalog_service import CatalogClient

logger = logging.getLogger(__name__)

Listener = Callable[[SynchronizationState], None]


class CatalogStore:
    def __init__(
        self,
        client: CatalogClient,
        *,
        serialize_operations: bool = False,
        initial_state: Optional[SynchronizationState] = None,
        default_page_size: Optional[int] = None,
    ):
        """
        `default_page_size` seeds `limit` of a fresh state. It cannot be combined
        with `initial_state`, which already carries its own `limit`.
        """
        if initial_state is not None and default_page_size is not None:
            raise ValueError("Pass either initial_state or default_page_size, not both.")
        if initial_state is None:
            initial_state = SynchronizationState(
                limit=DEFAULT_PAGE_SIZE if default_page_size is None else default_page_size
            )
        self._client = client
        self._state = initial_state
        self._listeners: List[Listener] = []
        # With a lock, operations run one at a time and the shared
        # is_loading/error fields always describe the running one.
        self._lock = asyncio.Lock() if serialize_operations else None
        self._operation_ids = itertools.count(1)

    @property
    def state(self) -> SynchronizationState:
        """Current read-only snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Intents ---------------------------------------------------------------

    async def list_products(self, limit: Optional[int] = None, skip: Optional[int] = None) -> Optional[ProductListResult]:
        return await self._run(OperationKind.LIST, lambda: self._client.list_products(limit=limit, skip=skip))

    async def get_product(self, product_id: int) -> Optional[Product]:
        return await self._run(OperationKind.GET_ONE, lambda: self._client.get_product(product_id))

    async def search_products(self, query: str) -> Optional[ProductListResult]:
        return await self._run(OperationKind.SEARCH, lambda: self._client.search_products(query))

    async def create_product(self, product: Union[CreateProductInput, Mapping[str, Any]]) -> Optional[Product]:
        return await self._run(OperationKind.CREATE, lambda: self._client.create_product(product))

    async def update_product(
        self, product_id: int, update: Union[ProductUpdate, Mapping[str, Any]]
    ) -> Optional[Product]:
        return await self._run(OperationKind.UPDATE, lambda: self._client.update_product(product_id, update))

    async def delete_product(self, product_id: int) -> Optional[DeleteResult]:
        return await self._run(OperationKind.DELETE, lambda: self._client.delete_product(product_id))

    def clear_error(self) -> None:
        self._commit(clear_error(self._state))

    def clear_product(self) -> None:
        """Drop the detail-view record. Requests already in flight still settle."""
        self._commit(clear_product(self._state))

    # --- Lifecycle ---------------------------------------------------------------

    async def _run(self, kind: OperationKind, call: Callable[[], Awaitable[Any]]) -> Any:
        if self._lock is None:
            return await self._execute(kind, call)
        async with self._lock:
            return await self._execute(kind, call)

    async def _execute(self, kind: OperationKind, call: Callable[[], Awaitable[Any]]) -> Any:
        operation_id = next(self._operation_ids)
        logger.info("Catalog operation #%d (%s) pending", operation_id, kind.value)
        self._commit(apply_pending(self._state, kind))

        try:
            payload = await call()
        except TransportError as exc:
            message = exc.message or DEFAULT_ERROR_MESSAGES[kind]
            logger.warning("Catalog operation #%d (%s) rejected: %s", operation_id, kind.value, message)
            self._commit(apply_rejected(self._state, kind, message))
            return None
        except ValueError as exc:
            logger.warning("Catalog operation #%d (%s) rejected invalid input: %s", operation_id, kind.value, exc)
            self._commit(apply_rejected(self._state, kind, DEFAULT_ERROR_MESSAGES[kind]))
            return None
        except asyncio.CancelledError:
            logger.warning("Catalog operation #%d (%s) cancelled", operation_id, kind.value)
            self._commit(apply_rejected(self._state, kind, DEFAULT_ERROR_MESSAGES[kind]))
            raise
        except Exception:
            logger.exception("Unexpected failure in catalog operation #%d (%s)", operation_id, kind.value)
            self._commit(apply_rejected(self._state, kind, DEFAULT_ERROR_MESSAGES[kind]))
            return None

        self._commit(apply_fulfilled(self._state, kind, payload))
        logger.info("Catalog operation #%d (%s) fulfilled", operation_id, kind.value)
        return payload

    def _commit(self, state: SynchronizationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Catalog state listener failed")
