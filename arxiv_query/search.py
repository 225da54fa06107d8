"""Convenience functions for one-off arXiv searches.

Each function accepts an already-open ArxivClient. Without one, a client is
opened with the default settings for the duration of the call.
"""

from .client import ArxivClient
from .models import ArxivResult
from .query import ArxivQuery


async def search(
    query: ArxivQuery,
    client: ArxivClient | None = None,
) -> list[ArxivResult]:
    """
    Fetch one page of results for a query descriptor.

    Args:
        query: Query descriptor
        client: Optional open ArxivClient. If not provided, a default one is used.

    Returns:
        List of ArxivResult objects

    Example:
        results = await search(ArxivQuery().with_search_query("all:RAG"))
    """
    if client:
        return await client.search(query)
    else:
        async with ArxivClient() as default_client:
            return await default_client.search(query)


async def fetch_by_ids(
    arxiv_ids: list[str],
    client: ArxivClient | None = None,
) -> list[ArxivResult]:
    """
    Fetch papers by arXiv ID.

    Args:
        arxiv_ids: arXiv IDs (e.g. ["2402.16893v1"])
        client: Optional open ArxivClient. If not provided, a default one is used.

    Returns:
        List of ArxivResult objects
    """
    if client:
        return await client.get_papers(arxiv_ids)
    else:
        async with ArxivClient() as default_client:
            return await default_client.get_papers(arxiv_ids)
