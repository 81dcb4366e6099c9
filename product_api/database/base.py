from typing import Any, Protocol

from product_api.errors import Result
from product_api.products.models import Product
from product_api.services.query_builder import ProductQuery


class ProductStore(Protocol):
    """
    What the API layer needs from storage.

    Data calls return a Result and never raise driver errors. `update`
    receives already-validated changes; `insert` receives a validated
    full record without `id` / `createdAt`.
    """

    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> Result[None]: ...

    async def find(self, query: ProductQuery) -> Result[list[Product]]: ...

    async def get(self, product_id: str) -> Result[Product]: ...

    async def insert(self, data: dict[str, Any]) -> Result[Product]: ...

    async def update(self, product_id: str, changes: dict[str, Any]) -> Result[Product]: ...

    async def delete(self, product_id: str) -> Result[Product]: ...
