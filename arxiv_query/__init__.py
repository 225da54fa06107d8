"""arXiv search API client.

Build queries with the predicate algebra, describe a page with ArxivQuery,
and fetch it with ArxivClient.

Usage:
    from arxiv_query import (
        ArxivClient, ArxivQuery, SearchField, SearchTerm, and_,
    )

    query = ArxivQuery().with_search_query(
        and_(SearchTerm(SearchField.TITLE, "RAG"), SearchTerm(SearchField.AUTHOR, "Doe"))
    )
    async with ArxivClient() as client:
        results = await client.search(query)
"""

from .client import ArxivClient, RateLimiter
from .config import ClientConfig, load_config, load_config_from_yaml
from .errors import (
    AmbiguousPdfLinkWarning,
    ArxivError,
    DecodeError,
    ResponseReadError,
    TransportError,
    UrlConstructionError,
)
from .feed import decode_feed, decode_results
from .models import ArxivResult, Author, Category, Entry, Feed, Link
from .protocols import QueryRenderable
from .query import ArxivQuery, SortBy, SortOrder
from .search import fetch_by_ids, search
from .search_query import (
    And,
    AndNot,
    Bracket,
    Or,
    QueryNode,
    RangeField,
    SearchField,
    SearchPredicate,
    SearchRange,
    SearchTerm,
    and_,
    and_all,
    and_not,
    bracket,
    or_,
    or_all,
)

__all__ = [
    # Predicate algebra
    "SearchField",
    "RangeField",
    "QueryNode",
    "SearchTerm",
    "SearchRange",
    "SearchPredicate",
    "And",
    "Or",
    "AndNot",
    "Bracket",
    "and_",
    "and_all",
    "or_",
    "or_all",
    "and_not",
    "bracket",
    # Query descriptor
    "QueryRenderable",
    "ArxivQuery",
    "SortBy",
    "SortOrder",
    # Models
    "Author",
    "Link",
    "Category",
    "Entry",
    "Feed",
    "ArxivResult",
    # Decoding
    "decode_feed",
    "decode_results",
    # Client
    "ArxivClient",
    "RateLimiter",
    "ClientConfig",
    "load_config",
    "load_config_from_yaml",
    # Errors
    "ArxivError",
    "UrlConstructionError",
    "TransportError",
    "ResponseReadError",
    "DecodeError",
    "AmbiguousPdfLinkWarning",
    # Convenience functions
    "search",
    "fetch_by_ids",
]
