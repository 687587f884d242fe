"""Asynchronous client for the CloudSearch 2011-02-01 search API."""

from collections.abc import Iterable
from concurrent.futures import Executor
from types import TracebackType
from typing import Any

import requests
from aws_lambda_powertools import Logger

from awswrap.cloudsearch.expressions import MatchExpression, Span, format_value
from awswrap.cloudsearch.models import (
    CloudSearchMetadata,
    CloudSearchRegion,
    Domain,
    Facet,
    Hit,
    SearchResult,
)
from awswrap.cloudsearch.params import FacetConstraint, Rank, RankExpr, Sort
from awswrap.core.config import AWSSettings
from awswrap.core.constants import (
    CLOUDSEARCH_API_VERSION,
    CLOUDSEARCH_DEFAULT_TIMEOUT,
    CLOUDSEARCH_ENDPOINT_TEMPLATE,
    ERROR_CODE_CLOUDSEARCH_INVALID_RESPONSE,
    ERROR_CODE_CLOUDSEARCH_TRANSPORT,
)
from awswrap.core.errors import CloudSearchError, ConfigurationError, ValidationError
from awswrap.core.futures import ExecutorOwner, wrap_async_method

logger = Logger(UTC=True)

Params = list[tuple[str, str]]
Score = tuple[str, range | Span]


def build_search_params(
    query: str | None = None,
    match_expression: MatchExpression | None = None,
    return_fields: Iterable[str] = (),
    facets: Iterable[str] = (),
    facet_constraints: Iterable[FacetConstraint] = (),
    facet_sort: Iterable[Sort] = (),
    facet_tops: Iterable[tuple[str, int]] = (),
    ranks: Iterable[Rank] = (),
    scores: Iterable[Score] = (),
    size: int | None = None,
    start: int | None = None,
) -> Params:
    """Assemble the ordered query string of a search request.

    Empty collections and None values contribute nothing.

    Raises:
        ValidationError: If neither `query` nor `match_expression` is given,
            or a score range is empty or stepped
    """
    if query is None and match_expression is None:
        raise ValidationError(message="A search needs a text query or a match expression")

    ranks = list(ranks)
    params: Params = []

    if query is not None:
        params.append(("q", query))
    if fields := ",".join(return_fields):
        params.append(("return-fields", fields))
    if match_expression is not None:
        params.append(("bq", str(match_expression)))
    if facet_names := ",".join(facets):
        params.append(("facet", facet_names))
    if size is not None:
        params.append(("size", str(size)))
    if start is not None:
        params.append(("start", str(start)))

    params.extend((f"facet-{c.field}-constraints", c.value) for c in facet_constraints)
    params.extend((f"facet-{s.field}-sort", s.value) for s in facet_sort)
    params.extend((f"facet-{field}-top-n", str(top)) for field, top in facet_tops)

    if ranks:
        params.append(("rank", ",".join(str(r) for r in ranks)))
    params.extend(
        (f"rank-{r.name}", r.expr)
        for r in ranks
        if isinstance(r, RankExpr) and r.expr is not None
    )

    params.extend((f"t-{field}", format_value(value)) for field, value in scores)
    return params


def parse_search_response(body: dict[str, Any]) -> SearchResult:
    """Translate a successful JSON response body into a SearchResult."""
    hits = body.get("hits", {})
    facets = [
        Facet(
            name=name,
            constraints=[(str(c["value"]), int(c["count"])) for c in facet.get("constraints", [])],
            min=facet.get("min"),
            max=facet.get("max"),
        )
        for name, facet in body.get("facets", {}).items()
    ]
    return SearchResult(
        metadata=CloudSearchMetadata.from_info(body.get("info", {})),
        found=int(hits.get("found", 0)),
        start=int(hits.get("start", 0)),
        hits=[Hit(id=str(h["id"]), data=h.get("data", {})) for h in hits.get("hit", [])],
        facets=facets,
        rank=body.get("rank"),
        match_expr=body.get("match-expr"),
    )


def _error_from_body(status: int, body: dict[str, Any]) -> CloudSearchError:
    messages = body.get("messages") or []
    first = messages[0] if messages else {}
    return CloudSearchError(
        message=first.get("message") or f"Search request failed with HTTP {status}",
        error_code=first.get("code") or f"HTTP_{status}",
        details={
            "status": status,
            "request_id": body.get("rid"),
            "messages": messages,
        },
    )


class CloudSearchClient(ExecutorOwner):
    """Runs structured searches against CloudSearch domains.

    Example:
        async with CloudSearchClient(CloudSearchRegion.US_EAST_1) as cs:
            result = await cs.search(
                Domain(name="movies", id="abc123"),
                match_expression=Field("title", "star wars") & Filter("year", range(1977, 1984)),
                ranks=[-TextRelevance()],
            )
    """

    def __init__(
        self,
        region: CloudSearchRegion | str | None = None,
        session: requests.Session | None = None,
        executor: Executor | None = None,
        *,
        settings: AWSSettings | None = None,
        timeout: float = CLOUDSEARCH_DEFAULT_TIMEOUT,
    ) -> None:
        self.settings = settings or AWSSettings.from_env()
        resolved = region or self.settings.region_name
        if not resolved:
            raise ConfigurationError(message="A CloudSearch region is required")

        self.region = str(resolved)
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._init_executor(self.settings, executor)

    def endpoint(self, domain: Domain) -> str:
        return CLOUDSEARCH_ENDPOINT_TEMPLATE.format(
            name=domain.name,
            id=domain.id,
            region=self.region,
            version=CLOUDSEARCH_API_VERSION,
        )

    build_params = staticmethod(build_search_params)

    async def search(
        self,
        domain: Domain,
        query: str | None = None,
        match_expression: MatchExpression | None = None,
        return_fields: Iterable[str] = (),
        facets: Iterable[str] = (),
        facet_constraints: Iterable[FacetConstraint] = (),
        facet_sort: Iterable[Sort] = (),
        facet_tops: Iterable[tuple[str, int]] = (),
        ranks: Iterable[Rank] = (),
        scores: Iterable[Score] = (),
        size: int | None = None,
        start: int | None = None,
    ) -> SearchResult:
        """Run a search and parse hits, facets and timing metadata.

        Raises:
            ValidationError: If neither `query` nor `match_expression` is given
            CloudSearchError: On transport failure, HTTP error or error body
        """
        params = build_search_params(
            query=query,
            match_expression=match_expression,
            return_fields=return_fields,
            facets=facets,
            facet_constraints=facet_constraints,
            facet_sort=facet_sort,
            facet_tops=facet_tops,
            ranks=ranks,
            scores=scores,
            size=size,
            start=start,
        )
        url = self.endpoint(domain)

        logger.debug("Searching", extra={"domain": domain.name, "params": params})

        try:
            response = await wrap_async_method(
                self._session.get,
                executor=self._executor,
                url=url,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Search request failed", extra={"domain": domain.name, "url": url})
            raise CloudSearchError(
                message="Unable to reach the search endpoint",
                error_code=ERROR_CODE_CLOUDSEARCH_TRANSPORT,
                details={"domain": domain.name, "url": url, "error": str(exc)},
            ) from exc

        status = response.status_code
        try:
            body = response.json()
        except ValueError as exc:
            if status >= 400:
                error = _error_from_body(status, {})
                logger.error(
                    "Search failed with a non-JSON body",
                    extra={"domain": domain.name, "status": status},
                )
                raise error from exc
            logger.error(
                "Search response is not JSON",
                extra={"domain": domain.name, "status": status},
            )
            raise CloudSearchError(
                message="Search endpoint returned a non-JSON body",
                error_code=ERROR_CODE_CLOUDSEARCH_INVALID_RESPONSE,
                details={"domain": domain.name, "status": status},
            ) from exc

        if not isinstance(body, dict):
            if status >= 400:
                raise _error_from_body(status, {})
            raise CloudSearchError(
                message="Search endpoint returned an unexpected body",
                error_code=ERROR_CODE_CLOUDSEARCH_INVALID_RESPONSE,
                details={"domain": domain.name, "status": status},
            )

        if status >= 400 or "error" in body:
            error = _error_from_body(status, body)
            logger.error(
                "Search returned an error",
                extra={"domain": domain.name, "error_code": error.error_code},
            )
            raise error

        result = parse_search_response(body)
        logger.debug(
            "Search completed",
            extra={
                "domain": domain.name,
                "found": result.found,
                "request_id": result.metadata.request_id,
            },
        )
        return result

    def close(self) -> None:
        """Close the owned HTTP session and executor."""
        if self._owns_session:
            self._session.close()
        self._shutdown_executor()

    async def __aenter__(self) -> "CloudSearchClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
