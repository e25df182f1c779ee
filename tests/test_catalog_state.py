import pytest

from src.catalog.state import (
    OperationKind,
    OperationStatus,
    SynchronizationState,
    apply_fulfilled,
    apply_pending,
    apply_rejected,
    clear_error,
    clear_product,
)
from src.integrations.contracts.product_catalogues import DeleteResult, ProductListResult
from tests.factories import make_product


def _page(ids, total, skip=0, limit=10):
    return ProductListResult(products=[make_product(i) for i in ids], total=total, skip=skip, limit=limit)


def test_initial_state_defaults():
    state = SynchronizationState()
    assert state.products == ()
    assert state.product is None
    assert state.is_loading is False
    assert state.error is None
    assert (state.total, state.skip, state.limit) == (0, 0, 10)
    assert all(status == OperationStatus.IDLE for status in state.operations.values())


@pytest.mark.parametrize("kind", list(OperationKind))
def test_pending_sets_loading_and_clears_error(kind):
    state = SynchronizationState(error="previous failure")
    out = apply_pending(state, kind)
    assert out.is_loading is True
    assert out.error is None
    assert out.status_of(kind) == OperationStatus.PENDING
    # the input snapshot is untouched
    assert state.error == "previous failure"
    assert state.is_loading is False


def test_list_fulfilled_replaces_page_and_pagination():
    state = apply_pending(SynchronizationState(products=(make_product(99),)), OperationKind.LIST)
    out = apply_fulfilled(state, OperationKind.LIST, _page(range(11, 21), total=57, skip=10, limit=10))
    assert [p.id for p in out.products] == list(range(11, 21))
    assert (out.total, out.skip, out.limit) == (57, 10, 10)
    assert out.is_loading is False
    assert out.status_of(OperationKind.LIST) == OperationStatus.FULFILLED


def test_get_one_fulfilled_only_touches_detail_slot():
    listed = SynchronizationState(products=(make_product(1), make_product(2)), total=2)
    detail = make_product(5, title="Detail")
    out = apply_fulfilled(apply_pending(listed, OperationKind.GET_ONE), OperationKind.GET_ONE, detail)
    assert out.product == detail
    assert out.products == listed.products
    assert out.is_loading is False


def test_search_fulfilled_keeps_previous_skip_and_limit():
    state = SynchronizationState(products=(make_product(1),), total=57, skip=20, limit=10)
    result = ProductListResult(products=[make_product(3), make_product(4)], total=2)
    out = apply_fulfilled(state, OperationKind.SEARCH, result)
    assert [p.id for p in out.products] == [3, 4]
    assert out.total == 2
    assert (out.skip, out.limit) == (20, 10)


def test_search_fulfilled_ignores_reported_paging():
    state = SynchronizationState(skip=20, limit=10)
    result = ProductListResult(products=[make_product(3)], total=1, skip=0, limit=1)
    out = apply_fulfilled(state, OperationKind.SEARCH, result)
    assert (out.skip, out.limit) == (20, 10)


def test_create_fulfilled_appends_without_touching_total():
    state = SynchronizationState(products=tuple(make_product(i) for i in range(1, 11)), total=57)
    out = apply_fulfilled(state, OperationKind.CREATE, make_product(101, title="Widget"))
    assert out.products[-1].id == 101
    assert len(out.products) == 11
    assert out.total == 57


def test_update_fulfilled_replaces_in_place_and_detail():
    state = SynchronizationState(
        products=(make_product(1), make_product(2), make_product(3)),
        product=make_product(2),
    )
    updated = make_product(2, title="X")
    out = apply_fulfilled(state, OperationKind.UPDATE, updated)
    assert [p.id for p in out.products] == [1, 2, 3]
    assert out.find_product(2).title == "X"
    assert out.product.title == "X"


def test_update_fulfilled_for_uncached_product_is_noop_on_list():
    state = SynchronizationState(products=(make_product(1),), product=make_product(1))
    out = apply_fulfilled(state, OperationKind.UPDATE, make_product(7, title="Elsewhere"))
    assert out.products == state.products
    assert out.product == state.product
    assert out.error is None


def test_update_fulfilled_refreshes_detail_even_when_not_listed():
    state = SynchronizationState(products=(make_product(1),), product=make_product(7))
    out = apply_fulfilled(state, OperationKind.UPDATE, make_product(7, title="Detail only"))
    assert out.product.title == "Detail only"
    assert out.products == state.products


def test_delete_confirmed_removes_product_and_detail():
    state = SynchronizationState(
        products=(make_product(1), make_product(101)),
        product=make_product(101),
        total=58,
    )
    out = apply_fulfilled(state, OperationKind.DELETE, DeleteResult(id=101, is_deleted=True))
    assert [p.id for p in out.products] == [1]
    assert out.product is None
    assert out.total == 58


def test_delete_keeps_detail_of_other_product():
    state = SynchronizationState(products=(make_product(1), make_product(2)), product=make_product(1))
    out = apply_fulfilled(state, OperationKind.DELETE, DeleteResult(id=2, is_deleted=True))
    assert out.product.id == 1


def test_delete_declined_leaves_cache_unchanged():
    state = SynchronizationState(products=(make_product(1), make_product(101)), product=make_product(101))
    pending = apply_pending(state, OperationKind.DELETE)
    out = apply_fulfilled(pending, OperationKind.DELETE, DeleteResult(id=101, is_deleted=False))
    assert out.products == state.products
    assert out.product == state.product
    assert out.error is None
    assert out.is_loading is False


def test_rejected_records_message_without_touching_cache():
    state = SynchronizationState(products=(make_product(1),), product=make_product(5), total=1)
    pending = apply_pending(state, OperationKind.GET_ONE)
    out = apply_rejected(pending, OperationKind.GET_ONE, "Failed to fetch product details")
    assert out.error == "Failed to fetch product details"
    assert out.is_loading is False
    assert out.products == state.products
    assert out.product == state.product
    assert out.status_of(OperationKind.GET_ONE) == OperationStatus.REJECTED


def test_clear_error_is_idempotent():
    state = SynchronizationState(error="boom", products=(make_product(1),))
    once = clear_error(state)
    twice = clear_error(once)
    assert once.error is None
    assert once == twice


def test_clear_product_only_clears_detail_slot():
    state = SynchronizationState(products=(make_product(1),), product=make_product(1), error="kept")
    out = clear_product(state)
    assert out.product is None
    assert out.products == state.products
    assert out.error == "kept"


def test_operations_mapping_is_read_only():
    state = SynchronizationState()
    with pytest.raises(TypeError):
        state.operations[OperationKind.LIST] = OperationStatus.PENDING


def test_to_dict_uses_wire_shape_for_products():
    state = SynchronizationState(products=(make_product(1, discountPercentage=12.5),), total=1)
    out = state.to_dict()
    assert out["products"][0]["discountPercentage"] == 12.5
    assert out["is_loading"] is False
    assert out["operations"]["list"] == "idle"
