import logging
import uuid
from fastapi import APIRouter, Request, Depends
from time import perf_counter

from app.core.exceptions import CatalogError
from app.models.api_response import APIResponse, Meta
from app.models.character_query import CharacterQuery
from gallery.views import total_pages
from models.bootstrap import GalleryBootstrap
from models.character import CharacterPage, PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter()

def _meta(query: CharacterQuery, total: int, start_time: float) -> Meta:
    took_ms = (perf_counter() - start_time) * 1000
    return Meta(
        page=query.page,
        page_size=PAGE_SIZE,
        total_hits=total,
        total_pages=total_pages(total),
        took_ms=round(took_ms, 2),
        request_id=uuid.uuid4().hex[:12],
    )

@router.get("/characters", response_model=APIResponse[CharacterPage])
async def list_characters(
    request: Request,
    query: CharacterQuery = Depends()
    ):
    client = request.app.state.catalog_client

    start_time = perf_counter()

    # CatalogError propagates to catalog_error_handler
    result = await client.search(query.search, query.page)

    return APIResponse(
        status="ok",
        data=result,
        meta=_meta(query, result.total, start_time)
    )

@router.get("/bootstrap", response_model=APIResponse[GalleryBootstrap])
async def bootstrap(
    request: Request,
    query: CharacterQuery = Depends()
    ):
    """
    First page for a (search, page) pair, rendered on the server so the client
    store can hydrate without fetching. A catalog failure never fails the page:
    the client gets the empty bootstrap and status "degraded".
    """
    client = request.app.state.catalog_client

    start_time = perf_counter()

    status = "ok"
    try:
        result = await client.search(query.search, query.page)
        data = GalleryBootstrap(
            results=result.items,
            total_count=result.total,
            page=query.page,
            search=query.search,
        )
    except CatalogError as e:
        logger.warning("Bootstrap for search=%r page=%s degraded: %s", query.search, query.page, e.code)
        data = GalleryBootstrap.empty(search=query.search, page=query.page)
        status = "degraded"

    return APIResponse(
        status=status,
        data=data,
        meta=_meta(query, data.total_count, start_time)
    )
