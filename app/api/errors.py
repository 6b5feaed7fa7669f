import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from app.models.api_response import APIResponse, APIError
from app.core.exceptions import CatalogError

logger = logging.getLogger(__name__)

async def catalog_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, CatalogError)

    logger.warning("%s %s failed: %s %s", request.method, request.url.path, exc.code, exc.details)

    return JSONResponse(
        status_code=502,
        content=APIResponse(
            status="error",
            error=APIError(
                code=exc.code,
                message=exc.message,
                details=exc.details
            )
        ).model_dump()
    )
