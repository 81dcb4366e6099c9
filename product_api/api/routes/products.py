import json

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from product_api.api.dependencies import error_response, get_settings, get_store
from product_api.config import Settings
from product_api.database.base import ProductStore
from product_api.errors import ErrorKind, Failure
from product_api.services import product_service

router = APIRouter()


class BodyError(Exception):
    pass


async def _read_body(request: Request):
    # a missing body counts as an empty object, like a partial update with no fields
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise BodyError(f"Malformed JSON body: {e}") from e


def _ok(payload, status_code: int = 200) -> JSONResponse:
    return JSONResponse(jsonable_encoder(payload), status_code=status_code)


@router.get("")
async def list_products(
    request: Request,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    List products. Query params: category, minPrice, maxPrice,
    sortBy (price_asc | price_desc), page, limit.
    """
    result = await product_service.list_products(
        store, request.query_params, max_page_size=settings.MAX_PAGE_SIZE
    )
    if not result.ok:
        return error_response(result.error)
    return _ok(result.value)


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    result = await product_service.get_product(store, product_id)
    if not result.ok:
        return error_response(result.error)
    return _ok(result.value)


@router.post("")
async def create_product(request: Request, store: ProductStore = Depends(get_store)):
    try:
        payload = await _read_body(request)
    except BodyError as e:
        return error_response(Failure(ErrorKind.VALIDATION, str(e)))

    result = await product_service.create_product(store, payload)
    if not result.ok:
        return error_response(result.error)
    return _ok(result.value, status_code=201)


@router.put("/{product_id}")
async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
    try:
        payload = await _read_body(request)
    except BodyError as e:
        return error_response(Failure(ErrorKind.VALIDATION, str(e)))

    result = await product_service.update_product(store, product_id, payload)
    if not result.ok:
        return error_response(result.error)
    return _ok(result.value)


@router.delete("/{product_id}")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    result = await product_service.delete_product(store, product_id)
    if not result.ok:
        return error_response(result.error)
    return {"message": "Product deleted successfully"}
