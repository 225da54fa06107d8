"""Protocol definitions for query rendering."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class QueryRenderable(Protocol):
    """Protocol for anything that can be rendered into an arXiv search query.

    Implemented by SearchTerm, SearchRange and the composite predicates in
    search_query. Implement it to plug a custom expression type into
    ArxivQuery.with_search_query().
    """

    def render(self) -> str:
        """
        Render the expression in the API's query-string grammar.

        Returns:
            Wire-format query string, e.g. "(ti:RAG AND au:John Doe)"
        """
        ...
