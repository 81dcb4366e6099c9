import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from pydantic import ValidationError

from product_api.config import Settings
from product_api.errors import Result, malformed_id, not_found, storage_fault
from product_api.products.models import Product
from product_api.services.query_builder import ProductQuery

logger = logging.getLogger(__name__)


def doc_to_product(doc: dict) -> Product:
    """Map a stored document (`_id` ObjectId) to the public record shape."""
    data = {k: v for k, v in doc.items() if k != "_id"}
    created_at = data.get("createdAt")
    # pymongo hands back naive datetimes unless tz_aware=True
    if isinstance(created_at, datetime) and created_at.tzinfo is None:
        data["createdAt"] = created_at.replace(tzinfo=timezone.utc)
    return Product(id=str(doc["_id"]), **data)


def products_result(docs: list[dict]) -> Result[list[Product]]:
    try:
        return Result.success([doc_to_product(d) for d in docs])
    except ValidationError as e:
        logger.error(f"Stored product document does not match the schema: {e}")
        return storage_fault(f"Stored product document is invalid: {e}")


def product_result(doc: dict) -> Result[Product]:
    result = products_result([doc])
    if not result.ok:
        return result
    return Result.success(result.value[0])


class MongoProductStore:
    def __init__(self, uri: str, db_name: str, collection: str = "products"):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection
        self.client: AsyncIOMotorClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoProductStore":
        return cls(settings.MONGO_URI, settings.MONGO_DB, settings.MONGO_COLLECTION)

    @property
    def collection(self):
        if self.client is None:
            raise RuntimeError("MongoProductStore used before connect()")
        return self.client[self.db_name][self.collection_name]

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(self.uri, tz_aware=True)
        result = await self.ping()
        if not result.ok:
            raise RuntimeError(f"MongoDB connection failed: {result.error.message}")
        logger.info(f"MongoDB connected: {self.db_name}.{self.collection_name}")

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None

    async def ping(self) -> Result[None]:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return storage_fault(str(e))
        return Result.success()

    async def find(self, query: ProductQuery) -> Result[list[Product]]:
        if query.is_empty_window:
            return Result.success([])

        cursor = self.collection.find(query.mongo_filter())
        sort = query.mongo_sort()
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(query.skip).limit(query.page_size)

        try:
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.exception("Product listing failed")
            return storage_fault(str(e))
        return products_result(docs)

    async def get(self, product_id: str) -> Result[Product]:
        if not ObjectId.is_valid(product_id):
            return malformed_id(product_id)
        try:
            doc = await self.collection.find_one({"_id": ObjectId(product_id)})
        except PyMongoError as e:
            logger.exception(f"Fetching product {product_id} failed")
            return storage_fault(str(e))
        if doc is None:
            return not_found()
        return product_result(doc)

    async def insert(self, data: dict[str, Any]) -> Result[Product]:
        doc = {**data, "createdAt": datetime.now(timezone.utc)}
        try:
            res = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.exception("Inserting product failed")
            return storage_fault(str(e))
        doc["_id"] = res.inserted_id
        return product_result(doc)

    async def update(self, product_id: str, changes: dict[str, Any]) -> Result[Product]:
        if not changes:
            return await self.get(product_id)
        if not ObjectId.is_valid(product_id):
            return malformed_id(product_id)
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": ObjectId(product_id)},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.exception(f"Updating product {product_id} failed")
            return storage_fault(str(e))
        if doc is None:
            return not_found()
        return product_result(doc)

    async def delete(self, product_id: str) -> Result[Product]:
        if not ObjectId.is_valid(product_id):
            return malformed_id(product_id)
        try:
            doc = await self.collection.find_one_and_delete({"_id": ObjectId(product_id)})
        except PyMongoError as e:
            logger.exception(f"Deleting product {product_id} failed")
            return storage_fault(str(e))
        if doc is None:
            return not_found()
        return product_result(doc)
