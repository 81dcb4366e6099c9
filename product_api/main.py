import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from product_api.api.router import api_router
from product_api.config import Settings, settings as default_settings
from product_api.database.base import ProductStore
from product_api.database.memory import InMemoryProductStore
from product_api.database.mongo import MongoProductStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ProductStore:
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryProductStore()
    if settings.STORAGE_BACKEND == "mongo":
        return MongoProductStore.from_settings(settings)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")


def create_app(settings: Settings | None = None, store: ProductStore | None = None) -> FastAPI:
    settings = settings or default_settings

    # Configure logging
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # storage must be reachable before the first request is served
        await app.state.store.connect()
        try:
            yield
        finally:
            await app.state.store.close()

    app = FastAPI(title="Product API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or build_store(settings)

    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"message": "Welcome to Product API"}

    return app


app = create_app()


def run():
    logger.info(f"Server is running on port {default_settings.PORT}")
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
