from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from product_search.config import DEFAULT_MIN_SCORE, DEFAULT_THRESHOLD

################################################################################
# Catalog records
################################################################################

class Brand(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None


class Specifications(BaseModel):
    model_config = ConfigDict(extra="allow")

    cpu: Optional[str] = None
    gpu: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None


class ProductRecord(BaseModel):
    """A catalog product as returned by the listing provider.

    Only the fields used for matching are declared; anything else the
    provider sends is kept and passed through untouched.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    title: Optional[str] = None
    description: Optional[str] = None
    brand: Optional[Brand] = None
    category_name: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    specifications: Optional[Specifications] = None

    @property
    def brand_name(self) -> Optional[str]:
        return self.brand.name if self.brand else None

################################################################################
# Ranking
################################################################################

class MatchSpan(BaseModel):
    field: str
    start: int
    end: int


class MatchResult(BaseModel):
    product: ProductRecord
    relevance: float = Field(ge=0.0, le=1.0)
    matched_spans: List[MatchSpan] = Field(default_factory=list)


class SearchOptions(BaseModel):
    threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    min_score: float = Field(default=DEFAULT_MIN_SCORE, ge=0.0, le=1.0)
    limit: Optional[int] = None


class FieldWeight(BaseModel):
    path: str
    weight: float = Field(gt=0.0)

################################################################################
# HTTP models
################################################################################

class SearchRequest(BaseModel):
    query: str
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    min_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    limit: Optional[int] = None


class SearchHit(BaseModel):
    product: Dict[str, Any]
    relevance: float
    matched_spans: List[MatchSpan] = Field(default_factory=list)
    # Title with the query wrapped in <mark> tags
    highlighted_title: Optional[str] = None


class SearchResponse(BaseModel):
    results: List[SearchHit]
    total_results: int
    query: str


class SuggestionResponse(BaseModel):
    query: str
    suggestions: List[str]


class HealthResponse(BaseModel):
    status: str
    catalog_ready: bool
    products: int
