from awswrap.cloudsearch.client import CloudSearchClient
from awswrap.cloudsearch.expressions import And, Field, Filter, Not, Or, Span
from awswrap.cloudsearch.models import CloudSearchRegion, Domain, SearchResult
from awswrap.cloudsearch.params import (
    Alpha,
    Count,
    FacetConstraint,
    Max,
    Ordering,
    RankExpr,
    RankField,
    Sum,
    TextRelevance,
    weight,
)

__all__ = [
    "Alpha",
    "And",
    "CloudSearchClient",
    "CloudSearchRegion",
    "Count",
    "Domain",
    "FacetConstraint",
    "Field",
    "Filter",
    "Max",
    "Not",
    "Or",
    "Ordering",
    "RankExpr",
    "RankField",
    "SearchResult",
    "Span",
    "Sum",
    "TextRelevance",
    "weight",
]
