import logging
from time import perf_counter
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.exceptions import CatalogDecodeError, CatalogResponseError, CatalogUnavailableError
from app.core.settings import DEFAULT_API_URL, Settings
from app.models.people_page import PeoplePage
from models.character import CharacterPage

logger = logging.getLogger(__name__)

# CATALOG NETWORKING CONSTANTS
CONNECT_TIMEOUT_SEC = 0.5
READ_TIMEOUT_SEC = 5.0


class CatalogClient:
    """
    Read-only client for the people search endpoint.

    One call, one request: no retries and no caching happen here. Every failure
    (transport, status, payload) is raised as a CatalogError subclass so callers
    only ever handle one exception family.
    """

    def __init__(
            self,
            base_url: str = DEFAULT_API_URL,
            connect_timeout: float = CONNECT_TIMEOUT_SEC,
            read_timeout: float = READ_TIMEOUT_SEC,
            http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self._owns_http_client = http_client is None
        if http_client is None:
            timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
            http_client = httpx.AsyncClient(timeout=timeout, headers={"Accept": "application/json"})
        self._http = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogClient":
        return cls(
            base_url=settings.api_url,
            connect_timeout=settings.connect_timeout_sec,
            read_timeout=settings.read_timeout_sec,
        )

    async def search(self, query: str, page: int) -> CharacterPage:
        params = {
            "search": query or "",
            "page": str(page),
        }

        t0 = perf_counter()
        try:
            resp = await self._http.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise CatalogUnavailableError(
                details={"query": query, "page": page, "error": type(e).__name__}
            ) from e

        took_ms = round((perf_counter() - t0) * 1000, 2)
        logger.debug("GET %s search=%r page=%s -> %s in %sms", self.base_url, query, page, resp.status_code, took_ms)

        if resp.status_code != 200:
            raise CatalogResponseError(
                details={"query": query, "page": page, "status_code": resp.status_code}
            )

        try:
            payload = PeoplePage.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise CatalogDecodeError(
                details={"query": query, "page": page, "error": str(e)}
            ) from e

        return payload.to_character_page()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
