from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

ALL_CATEGORIES = "all-categories"


class SearchRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    searchTerm: str = ""
    barcode: str = ""
    category: str = ALL_CATEGORIES


class ResultEnvelope(BaseModel):
    # Products are upstream records, passed through untouched.
    products: List[Dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    pageCount: int = 1

    def to_response(self) -> dict:
        return {"products": self.products, "page": self.page, "pageCount": self.pageCount}


class NutritionGrade(BaseModel):
    grade: str
    description: str


class NutritionFact(BaseModel):
    key: str
    label: str
    value: Optional[float] = None
    display: str


class ProductDetail(BaseModel):
    product: dict
    nutrition_grade: Optional[NutritionGrade] = None
    nutrition_facts: List[NutritionFact] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    allergens: List[str] = Field(default_factory=list)
