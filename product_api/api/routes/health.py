from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from product_api.api.dependencies import get_store
from product_api.database.base import ProductStore

router = APIRouter()

@router.get("")
async def health_check(store: ProductStore = Depends(get_store)):
    result = await store.ping()
    if not result.ok:
        return JSONResponse({"status": "unhealthy", "message": result.error.message}, status_code=503)
    return {"status": "healthy"}
