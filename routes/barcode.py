from fastapi import APIRouter, Depends, HTTPException

from errors import NotFoundError, UpstreamError
from logging_config import get_logger
from models import ProductDetail
from nutrition import nutrition_facts, nutrition_grade, split_list
from upstream import OpenFoodFactsClient, get_upstream

router = APIRouter()
logger = get_logger(__name__)


@router.get("/{barcode}", response_model=ProductDetail)
async def product_detail(barcode: str, upstream: OpenFoodFactsClient = Depends(get_upstream)):
    # One direct lookup; failures are reported, never retried.
    try:
        product = await upstream.fetch_product(barcode)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    except UpstreamError as e:
        logger.warning("product_detail_fetch_failed", barcode=barcode, error=str(e))
        raise HTTPException(status_code=404, detail="Failed to fetch product details")
    grade = product.get("nutrition_grades")
    return ProductDetail(
        product=product,
        nutrition_grade=nutrition_grade(grade if isinstance(grade, str) else None),
        nutrition_facts=nutrition_facts(product.get("nutriments")),
        categories=split_list(product.get("categories")),
        labels=split_list(product.get("labels")),
        allergens=split_list(product.get("allergens")),
    )
