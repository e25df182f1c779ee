from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from src.integrations.contracts.interfaces import TransportError
from src.integrations.contracts.product_catalogues import DeleteResult, Product, ProductListResult


class CatalogResponseError(TransportError):
    """A response body that cannot be normalized into a catalog contract."""

    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


def normalize_product(raw: Any) -> Product:
    data = _require_mapping(raw, "product")
    if data.get("id") is None:
        raise CatalogResponseError("Missing required field. Checked keys: id", payload=raw)
    return _build_model(Product, data, raw)


def normalize_product_list(raw: Any, *, requested_limit: Optional[int] = None) -> ProductListResult:
    data = _require_mapping(raw, "product list")
    if not isinstance(data.get("products"), list):
        raise CatalogResponseError("Missing required field. Checked keys: products", payload=raw)
    if data.get("total") is None:
        raise CatalogResponseError("Missing required field. Checked keys: total", payload=raw)

    result = _build_model(ProductListResult, data, raw)

    # The server decides page contents, but never more than we asked for.
    if requested_limit and len(result.products) > requested_limit:
        raise CatalogResponseError(
            f"Page holds {len(result.products)} products; requested limit was {requested_limit}.",
            payload=raw,
        )
    return result


def normalize_delete_result(raw: Any, *, product_id: int) -> DeleteResult:
    data = _require_mapping(raw, "delete acknowledgement")
    # Only an explicit `true` counts as a completed delete.
    return _build_model(
        DeleteResult,
        {
            "id": product_id,
            "isDeleted": data.get("isDeleted") is True,
            "deletedOn": data.get("deletedOn"),
        },
        raw,
    )


def _require_mapping(raw: Any, label: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise CatalogResponseError(f"Expected a JSON object for {label}; got {type(raw).__name__}.", payload=raw)
    return raw


def _build_model(model_type, payload: Dict[str, Any], raw: Any):
    try:
        return model_type.model_validate(payload)
    except ValidationError as exc:
        raise CatalogResponseError(f"Response validation failed: {exc}", payload=raw) from exc
