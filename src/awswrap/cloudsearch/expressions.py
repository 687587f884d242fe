"""
Boolean match expressions for the CloudSearch `bq` parameter.

Expressions form an immutable tree whose string form is the 2011-02-01
structured query syntax:

    >>> str(Field("title", "star wars") & ~Filter("year", range(1990, 2000)))
    "(and (field title 'star wars') (not (filter year 1990..1999)))"
"""

from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Number

from awswrap.core.errors import ValidationError


@dataclass(frozen=True)
class Span:
    """Inclusive uint range; a missing bound leaves that side open."""

    start: int | None = None
    end: int | None = None

    def __str__(self) -> str:
        lower = "" if self.start is None else str(self.start)
        upper = "" if self.end is None else str(self.end)
        return f"{lower}..{upper}"


FieldValue = int | float | str | range | Span


def quote(value: str) -> str:
    """Single-quote a string literal, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def format_value(value: FieldValue) -> str:
    """Render a field value the way the query grammar expects it.

    Numbers are emitted verbatim, strings quoted, and Python ranges as
    their inclusive bounds (`range(1, 5)` is `1..4`).
    """
    if isinstance(value, bool):
        raise ValidationError(
            message="Boolean values are not supported in match expressions",
            details={"value": value},
        )
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, Span):
        return str(value)
    if isinstance(value, range):
        if value.step != 1 or len(value) == 0:
            raise ValidationError(
                message="Ranges must be non-empty with a step of 1",
                details={"value": repr(value)},
            )
        return str(Span(value.start, value.stop - 1))
    if isinstance(value, Number):
        return str(value)
    raise ValidationError(
        message=f"Unsupported value type: {type(value).__name__}",
        details={"value": repr(value)},
    )


class MatchExpression:
    """Base node. Combine with `&`, `|` and `~`, or `and_`/`or_`."""

    def and_(self, other: "MatchExpression") -> "And":
        return And(self, other)

    def or_(self, other: "MatchExpression") -> "Or":
        return Or(self, other)

    def __and__(self, other: "MatchExpression") -> "And":
        return And(self, other)

    def __or__(self, other: "MatchExpression") -> "Or":
        return Or(self, other)

    def __invert__(self) -> "Not":
        return Not(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchExpression):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class _Term(MatchExpression):
    keyword = ""

    def __init__(self, name: str, value: FieldValue) -> None:
        self.name = name
        self.value = format_value(value)

    @classmethod
    def between(cls, name: str, start: int | None = None, end: int | None = None):
        """Open or closed inclusive range on a uint field."""
        return cls(name, Span(start, end))

    def __str__(self) -> str:
        return f"({self.keyword} {self.name} {self.value})"


class Field(_Term):
    """Match documents whose text or literal field matches the value."""

    keyword = "field"


class Filter(_Term):
    """Like Field, but does not contribute to text relevance."""

    keyword = "filter"


class Not(MatchExpression):
    def __init__(self, expression: MatchExpression) -> None:
        self.expression = expression

    def __str__(self) -> str:
        return f"(not {self.expression})"


class _Group(MatchExpression):
    keyword = ""

    def __init__(self, *expressions: MatchExpression) -> None:
        if not expressions:
            raise ValidationError(message=f"'{self.keyword}' needs at least one operand")
        self.expressions: tuple[MatchExpression, ...] = expressions

    def __str__(self) -> str:
        operands = " ".join(str(e) for e in self.expressions)
        return f"({self.keyword} {operands})"


class And(_Group):
    keyword = "and"


class Or(_Group):
    keyword = "or"


def all_of(expressions: Iterable[MatchExpression]) -> And:
    return And(*expressions)


def any_of(expressions: Iterable[MatchExpression]) -> Or:
    return Or(*expressions)
