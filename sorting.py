"""Ordering of a returned page by product name or nutrition grade."""
from typing import Any, Dict, List, Optional

# Products without a grade sort after "e".
MISSING_GRADE = "z"


def _text(product: Dict[str, Any], key: str) -> Optional[str]:
    value = product.get(key)
    return value if isinstance(value, str) and value else None


def _name_key(product: Dict[str, Any]) -> str:
    return (_text(product, "product_name") or "").casefold()


def _grade_key(product: Dict[str, Any]) -> str:
    return (_text(product, "nutrition_grades") or MISSING_GRADE).lower()


def sort_products(
    products: List[Dict[str, Any]],
    sort_by: Optional[str] = None,
    sort_order: str = "asc",
) -> List[Dict[str, Any]]:
    """Stable sort; upstream order is kept when sort_by is None and for ties."""
    if sort_by is None:
        return list(products)
    key = _name_key if sort_by == "name" else _grade_key
    return sorted(products, key=key, reverse=sort_order == "desc")
