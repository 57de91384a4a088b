from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from errors import NotFoundError, UpstreamError
from logging_config import get_logger
from models import ALL_CATEGORIES, ResultEnvelope, SearchRequest
from sorting import sort_products
from upstream import OpenFoodFactsClient, get_upstream

router = APIRouter()
categories_router = APIRouter()
logger = get_logger(__name__)

CATEGORIES = [
    "beverages",
    "dairy",
    "snacks",
    "breakfast-cereals",
    "bread",
    "chocolate",
    "cookies",
    "frozen-foods",
    "meat",
    "fish",
    "fruits",
    "vegetables",
]


# GET /api/products proxies a search to Open Food Facts
@router.get("")
async def list_products(
    page: int = Query(default=1, ge=1),
    searchTerm: str = "",
    barcode: str = "",
    category: str = ALL_CATEGORIES,
    sortBy: Optional[Literal["name", "grade"]] = None,
    sortOrder: Literal["asc", "desc"] = "asc",
    upstream: OpenFoodFactsClient = Depends(get_upstream),
):
    request = SearchRequest(page=page, searchTerm=searchTerm, barcode=barcode, category=category)
    try:
        envelope = await upstream.search(request)
    except NotFoundError as e:
        logger.info("product_not_found", barcode=e.barcode)
        return JSONResponse(content=ResultEnvelope().to_response(), status_code=404)
    except UpstreamError as e:
        logger.error("upstream_fetch_failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(content={"message": "Upstream fetch failed", "error": str(e)}, status_code=500)
    envelope.products = sort_products(envelope.products, sortBy, sortOrder)
    return JSONResponse(content=envelope.to_response())


# GET /api/categories lists the browsable categories
@categories_router.get("")
def list_categories():
    return {"default": ALL_CATEGORIES, "categories": CATEGORIES}
