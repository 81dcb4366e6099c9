from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "product_api"
    MONGO_COLLECTION: str = "products"

    # "mongo" in production, "memory" for local runs without a database
    STORAGE_BACKEND: str = "mongo"

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Unset means no upper bound on ?limit=
    MAX_PAGE_SIZE: int | None = None

    class Config:
        env_file = ".env"

settings = Settings()
