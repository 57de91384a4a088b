"""
Open Food Facts client.

Maps a SearchRequest onto one of the upstream URL shapes, fetches it through
retry_fetch and normalizes the payload into a ResultEnvelope. Also exposes
the single, non-retried product lookup used by the detail endpoint.
"""
import asyncio
import math
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from config import settings
from errors import MalformedResponseError, NotFoundError
from logging_config import get_logger
from models import ALL_CATEGORIES, ResultEnvelope, SearchRequest
from retry_fetch import DEFAULT_DELAY_MS, DEFAULT_RETRIES, Sleep, build_headers, retry_fetch, send_once

logger = get_logger(__name__)

PAGE_SIZE = 20

PRODUCT_PATH = "/api/v0/product/{barcode}.json"
SEARCH_PATH = "/cgi/search.pl?search_terms={term}&page={page}&json=true&page_size={page_size}"
CATEGORY_PATH = "/category/{category}/{page}.json?page_size={page_size}"
DEFAULT_LISTING_PATH = "/cgi/search.pl?action=process&sort_by=popularity&page={page}&json=true&page_size={page_size}"


def product_url(base_url: str, barcode: str) -> str:
    return base_url.rstrip("/") + PRODUCT_PATH.format(barcode=quote(barcode, safe=""))


def listing_url(base_url: str, request: SearchRequest) -> str:
    """URL for the paginated shapes: free-text search, category browse or popularity listing."""
    base = base_url.rstrip("/")
    if request.searchTerm:
        return base + SEARCH_PATH.format(
            term=quote(request.searchTerm, safe=""), page=request.page, page_size=PAGE_SIZE
        )
    if request.category != ALL_CATEGORIES:
        return base + CATEGORY_PATH.format(
            category=quote(request.category, safe=":"), page=request.page, page_size=PAGE_SIZE
        )
    return base + DEFAULT_LISTING_PATH.format(page=request.page, page_size=PAGE_SIZE)


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise MalformedResponseError(f"invalid JSON from {response.url}: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError(f"expected a JSON object from {response.url}")
    return data


def _parse_products(raw: Any) -> List[Dict[str, Any]]:
    """Products are passed through verbatim; only the container shape is checked."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedResponseError("'products' is not a list")
    if not all(isinstance(item, dict) for item in raw):
        raise MalformedResponseError("'products' contains a non-object entry")
    return raw


def compute_page_count(data: Dict[str, Any]) -> int:
    try:
        if data.get("page_count") is not None:
            return int(data["page_count"])
        count = int(data.get("count") or 0)
        if count > 0:
            return math.ceil(count / PAGE_SIZE)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"unusable pagination fields: {exc}") from exc
    return 1


def found_product(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if data.get("status") == 1 and data.get("product") is not None:
        return data["product"]
    return None


class OpenFoodFactsClient:
    """Async client for the Open Food Facts read API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        user_agent: str,
        retries: int = DEFAULT_RETRIES,
        delay_ms: int = DEFAULT_DELAY_MS,
        sleep: Sleep = asyncio.sleep,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.retries = retries
        self.delay_ms = delay_ms
        self.sleep = sleep

    async def _fetch_json(self, url: str) -> Dict[str, Any]:
        response = await retry_fetch(
            self.http,
            url,
            user_agent=self.user_agent,
            retries=self.retries,
            delay_ms=self.delay_ms,
            sleep=self.sleep,
        )
        return _json_body(response)

    async def search(self, request: SearchRequest) -> ResultEnvelope:
        """
        Resolve a SearchRequest to a ResultEnvelope.

        Barcode beats searchTerm, and both beat category. Raises NotFoundError
        when a barcode lookup finds nothing, UpstreamExhaustedError when
        retries run out and MalformedResponseError for unusable bodies.
        """
        if request.barcode:
            data = await self._fetch_json(product_url(self.base_url, request.barcode))
            product = found_product(data)
            if product is None:
                raise NotFoundError(request.barcode)
            return ResultEnvelope(products=_parse_products([product]), page=1, pageCount=1)

        url = listing_url(self.base_url, request)
        data = await self._fetch_json(url)
        envelope = ResultEnvelope(
            products=_parse_products(data.get("products")),
            page=request.page,
            pageCount=compute_page_count(data),
        )
        logger.info(
            "upstream_listing_fetched",
            url=url,
            page=envelope.page,
            page_count=envelope.pageCount,
            products=len(envelope.products),
        )
        return envelope

    async def fetch_product(self, barcode: str) -> Dict[str, Any]:
        """
        Single lookup with no retry.

        Returns the raw product record. Raises NotFoundError when the
        upstream has no such product, TransientUpstreamError on network or
        status failures and MalformedResponseError on unusable bodies.
        """
        url = product_url(self.base_url, barcode)
        response = await send_once(self.http, url, build_headers(self.user_agent))
        product = found_product(_json_body(response))
        if product is None:
            raise NotFoundError(barcode)
        if not isinstance(product, dict):
            raise MalformedResponseError("'product' is not an object")
        return product


async def get_upstream():
    """FastAPI dependency: one Open Food Facts client per request."""
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as http:
        yield OpenFoodFactsClient(
            http,
            base_url=settings.off_base_url,
            user_agent=settings.off_user_agent,
            retries=settings.upstream_retries,
            delay_ms=settings.upstream_retry_delay_ms,
        )
