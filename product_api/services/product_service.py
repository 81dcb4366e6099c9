import logging
from collections.abc import Mapping
from typing import Any

from product_api.database.base import ProductStore
from product_api.errors import ErrorKind, Result, not_found
from product_api.products.models import MUTABLE_FIELDS, Product
from product_api.products.validation import validate_product
from product_api.services.query_builder import build_product_query

logger = logging.getLogger(__name__)


async def list_products(store: ProductStore, params: Mapping[str, str], max_page_size: int | None = None) -> Result[list[Product]]:
    query = build_product_query(params, max_page_size=max_page_size)
    return await store.find(query)


def _absent_if_malformed(result: Result[Product]) -> Result[Product]:
    # read and delete treat an unparseable id like any other missing product
    if not result.ok and result.error.kind is ErrorKind.MALFORMED_ID:
        return not_found()
    return result


async def get_product(store: ProductStore, product_id: str) -> Result[Product]:
    return _absent_if_malformed(await store.get(product_id))


async def create_product(store: ProductStore, payload: Any) -> Result[Product]:
    checked = validate_product(payload)
    if not checked.ok:
        return Result.failure(ErrorKind.VALIDATION, checked.message())

    result = await store.insert(checked.value)
    if result.ok:
        logger.info(f"Created product {result.value.id} ({result.value.name})")
    return result


async def update_product(store: ProductStore, product_id: str, payload: Any) -> Result[Product]:
    """
    Apply a partial update.

    The given fields are checked on their own first, then the merged
    record is checked as a whole before anything is written. Only the
    changed fields are sent to storage.
    """
    checked = validate_product(payload, partial=True)
    if not checked.ok:
        return Result.failure(ErrorKind.VALIDATION, checked.message())

    current = await store.get(product_id)
    if not current.ok:
        return current

    merged = {**current.value.model_dump(include=set(MUTABLE_FIELDS)), **checked.value}
    whole = validate_product(merged)
    if not whole.ok:
        return Result.failure(ErrorKind.VALIDATION, whole.message())

    changes = {k: v for k, v in checked.value.items() if k in MUTABLE_FIELDS}
    result = await store.update(product_id, changes)
    if result.ok and changes:
        logger.info(f"Updated product {product_id}: {', '.join(sorted(changes))}")
    return result


async def delete_product(store: ProductStore, product_id: str) -> Result[Product]:
    result = _absent_if_malformed(await store.delete(product_id))
    if result.ok:
        logger.info(f"Deleted product {product_id}")
    return result
