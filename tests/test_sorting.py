from sorting import sort_products

PRODUCTS = [
    {"code": "a", "product_name": "Zest", "nutrition_grades": "B"},
    {"code": "b", "product_name": {"en": "Milk"}},
    {"code": "c", "product_name": "apple", "nutrition_grades": "b"},
    {"code": "d", "nutrition_grades": "a"},
]


def codes(products):
    return [p["code"] for p in products]


def test_no_sort_returns_copy_in_upstream_order():
    result = sort_products(PRODUCTS)
    assert codes(result) == ["a", "b", "c", "d"]
    assert result is not PRODUCTS


def test_name_ascending_is_case_insensitive_and_missing_names_first():
    assert codes(sort_products(PRODUCTS, "name")) == ["b", "d", "c", "a"]


def test_name_descending():
    assert codes(sort_products(PRODUCTS, "name", "desc")) == ["a", "c", "b", "d"]


def test_grade_ascending_keeps_ties_in_upstream_order():
    assert codes(sort_products(PRODUCTS, "grade")) == ["d", "a", "c", "b"]
