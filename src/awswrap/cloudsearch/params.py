"""Facet, sort and rank parameters of a CloudSearch search request."""

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from awswrap.cloudsearch.expressions import FieldValue, Span, format_value, quote


class Ordering(Enum):
    ASC = ""
    DESC = "-"


@dataclass(frozen=True)
class FacetConstraint:
    """Restrict the facet counts returned for `field` to `value`.

    Accepts the same values as match expressions, plus a list or tuple of
    strings rendered as `'a','b'`. `value` holds the rendered form.
    """

    field: str
    value: FieldValue | Sequence[str]

    def __post_init__(self) -> None:
        if isinstance(self.value, (list, tuple)):
            rendered = ",".join(quote(v) for v in self.value)
        else:
            rendered = format_value(self.value)
        object.__setattr__(self, "value", rendered)

    @classmethod
    def of(cls, field: str, value: FieldValue | Sequence[str]) -> "FacetConstraint":
        return cls(field, value)

    @classmethod
    def between(cls, field: str, start: int | None = None, end: int | None = None) -> "FacetConstraint":
        return cls(field, Span(start, end))


class Sort(ABC):
    """Facet sort order, emitted as `facet-<field>-sort`."""

    field: str

    @property
    @abstractmethod
    def value(self) -> str: ...


@dataclass(frozen=True)
class Alpha(Sort):
    field: str

    @property
    def value(self) -> str:
        return "Alpha"


@dataclass(frozen=True)
class Count(Sort):
    field: str

    @property
    def value(self) -> str:
        return "Count"


@dataclass(frozen=True)
class Max(Sort):
    field: str
    ordering: Ordering = Ordering.ASC

    @property
    def value(self) -> str:
        return f"{self.ordering.value}Max({self.field})"

    def __neg__(self) -> "Max":
        return replace(self, ordering=Ordering.DESC)


@dataclass(frozen=True)
class Sum(Sort):
    field: str

    @property
    def value(self) -> str:
        return f"Sum({self.field})"


class Rank(ABC):
    """One entry of the comma-separated `rank` parameter."""

    name: str
    ordering: Ordering

    def __str__(self) -> str:
        return f"{self.ordering.value}{self.name}"

    def __neg__(self):
        return replace(self, ordering=Ordering.DESC)


@dataclass(frozen=True)
class TextRelevance(Rank):
    ordering: Ordering = Ordering.ASC
    name: str = "text_relevance"


@dataclass(frozen=True)
class RankField(Rank):
    name: str
    ordering: Ordering = Ordering.ASC


@dataclass(frozen=True)
class RankExpr(Rank):
    """Named rank expression, defined inline via `rank-<name>` when `expr` is set."""

    name: str
    expr: str | None = None
    ordering: Ordering = Ordering.ASC


def weight(**weights: float) -> str:
    """JSON weights for `cs.text_relevance`, e.g. weight(title=4.0, body=1.0)."""
    return json.dumps({"weights": weights})
