"""Query descriptor for the arXiv search endpoint."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

import httpx

from .errors import UrlConstructionError
from .protocols import QueryRenderable

logger = logging.getLogger(__name__)


class SortBy(Enum):
    """Sort criterion accepted by the API's ``sortBy`` parameter."""

    RELEVANCE = "relevance"
    LAST_UPDATED_DATE = "lastUpdatedDate"
    SUBMITTED_DATE = "submittedDate"


class SortOrder(Enum):
    """Sort direction accepted by the API's ``sortOrder`` parameter."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class ArxivQuery:
    """
    Immutable description of one page of an arXiv search.

    Every ``with_*`` step returns a new descriptor; the original is untouched.

    Usage:
        query = (
            ArxivQuery()
            .with_search_query(and_(title, author))
            .with_max_results(50)
            .with_sort_by(SortBy.SUBMITTED_DATE)
        )
        url = query.to_url("http://export.arxiv.org/api/query")
    """

    search_query: str | QueryRenderable | None = None
    id_list: tuple[str, ...] = field(default_factory=tuple)
    start: int = 0
    max_results: int = 10
    sort_by: SortBy | None = None
    sort_order: SortOrder | None = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("start must be non-negative")
        if self.max_results < 0:
            raise ValueError("max_results must be non-negative")
        if isinstance(self.id_list, str):
            raise TypeError(
                f"id_list must be a sequence of IDs, not a single string: {self.id_list!r}"
            )
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "id_list", tuple(self.id_list))

    def with_search_query(self, search_query: str | QueryRenderable) -> ArxivQuery:
        return replace(self, search_query=search_query)

    def with_id_list(self, id_list: Iterable[str]) -> ArxivQuery:
        return replace(self, id_list=id_list)

    def with_start(self, start: int) -> ArxivQuery:
        return replace(self, start=start)

    def with_max_results(self, max_results: int) -> ArxivQuery:
        return replace(self, max_results=max_results)

    def with_sort_by(self, sort_by: SortBy) -> ArxivQuery:
        return replace(self, sort_by=sort_by)

    def with_sort_order(self, sort_order: SortOrder) -> ArxivQuery:
        return replace(self, sort_order=sort_order)

    def next_page_query(self) -> ArxivQuery:
        """Descriptor for the following page (start advanced by max_results)."""
        return replace(self, start=self.start + self.max_results)

    def rendered_search_query(self) -> str | None:
        """Wire form of search_query, or None when no search query is set."""
        if self.search_query is None:
            return None
        if isinstance(self.search_query, str):
            return self.search_query
        if isinstance(self.search_query, QueryRenderable):
            return self.search_query.render()
        raise TypeError(
            f"search_query must be a string or renderable expression, "
            f"got {type(self.search_query).__name__}"
        )

    def to_parameter_map(self) -> dict[str, str]:
        """Convert the descriptor to API query parameters."""
        params: dict[str, str] = {}

        search_query = self.rendered_search_query()
        if search_query is not None:
            params["search_query"] = search_query

        if self.id_list:
            params["id_list"] = ",".join(self.id_list)

        params["start"] = str(self.start)
        params["max_results"] = str(self.max_results)

        if self.sort_by is not None:
            params["sortBy"] = self.sort_by.value

        if self.sort_order is not None:
            params["sortOrder"] = self.sort_order.value

        return params

    def to_url(self, base: str) -> str:
        """
        Build the percent-encoded request URL.

        Args:
            base: API endpoint, e.g. "http://export.arxiv.org/api/query"

        Returns:
            Full request URL

        Raises:
            UrlConstructionError: If base is not an absolute http(s) URL
        """
        params = self.to_parameter_map()
        try:
            url = httpx.URL(base)
        except (httpx.InvalidURL, TypeError) as e:
            raise UrlConstructionError(
                f"Failed to build URL from base {base!r} with params {params}"
            ) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise UrlConstructionError(
                f"Base {base!r} is not an absolute http(s) endpoint (params {params})"
            )

        full_url = str(url.copy_merge_params(params))
        logger.debug(f"Built arXiv request URL: {full_url}")
        return full_url
