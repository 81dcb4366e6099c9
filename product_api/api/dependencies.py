from fastapi import Request
from fastapi.responses import JSONResponse

from product_api.config import Settings
from product_api.database.base import ProductStore
from product_api.errors import Failure


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(failure: Failure) -> JSONResponse:
    return JSONResponse({"message": failure.message}, status_code=failure.status_code)
