import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

from product_api.errors import Result, malformed_id, not_found
from product_api.products.models import Product
from product_api.services.query_builder import ProductQuery

logger = logging.getLogger(__name__)


class InMemoryProductStore:
    """
    Dict-backed store for local runs and tests.

    Ids are ObjectId hex strings so the malformed-id rules match the
    Mongo backend. Natural order is insertion order.
    """

    def __init__(self):
        self._products: dict[str, Product] = {}

    async def connect(self) -> None:
        logger.info("Using in-memory product store")

    async def close(self) -> None:
        self._products.clear()

    async def ping(self) -> Result[None]:
        return Result.success()

    async def find(self, query: ProductQuery) -> Result[list[Product]]:
        return Result.success(query.apply(list(self._products.values())))

    async def get(self, product_id: str) -> Result[Product]:
        if not ObjectId.is_valid(product_id):
            return malformed_id(product_id)
        product = self._products.get(str(ObjectId(product_id)))
        if product is None:
            return not_found()
        return Result.success(product)

    async def insert(self, data: dict[str, Any]) -> Result[Product]:
        pid = str(ObjectId())
        product = Product(id=pid, createdAt=datetime.now(timezone.utc), **data)
        self._products[pid] = product
        return Result.success(product)

    async def update(self, product_id: str, changes: dict[str, Any]) -> Result[Product]:
        found = await self.get(product_id)
        if not found.ok:
            return found
        product = found.value.model_copy(update=changes)
        self._products[product.id] = product
        return Result.success(product)

    async def delete(self, product_id: str) -> Result[Product]:
        if not ObjectId.is_valid(product_id):
            return malformed_id(product_id)
        product = self._products.pop(str(ObjectId(product_id)), None)
        if product is None:
            return not_found()
        return Result.success(product)
