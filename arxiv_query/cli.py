"""Command-line interface for the arXiv query client."""

import asyncio
import json
from dataclasses import replace
from typing import Annotated

import typer

from .client import ArxivClient
from .config import ClientConfig, load_config
from .errors import ArxivError
from .models import ArxivResult
from .query import ArxivQuery, SortBy, SortOrder
from .search_query import (
    QueryNode,
    RangeField,
    SearchField,
    SearchRange,
    SearchTerm,
    and_all,
)
from .settings import setup_logging

app = typer.Typer(
    name="arxiv-query",
    help="Search the arXiv API from the command line.",
    add_completion=False,
)


def build_query(
    raw_query: str | None = None,
    title: str | None = None,
    author: str | None = None,
    abstract: str | None = None,
    categories: list[str] | None = None,
    submitted_from: str | None = None,
    submitted_to: str | None = None,
    ids: list[str] | None = None,
    start: int = 0,
    max_results: int = 10,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> ArxivQuery:
    """Build a query descriptor from CLI arguments.

    Field options become terms ANDed together. A raw query is sent verbatim
    and cannot be combined with field options. The submission window covers
    both named days in full.
    """
    terms: list[QueryNode] = []
    if title:
        terms.append(SearchTerm(SearchField.TITLE, title))
    if author:
        terms.append(SearchTerm(SearchField.AUTHOR, author))
    if abstract:
        terms.append(SearchTerm(SearchField.ABSTRACT, abstract))
    for category in categories or []:
        terms.append(SearchTerm(SearchField.SUBJECT_CATEGORY, category))
    if submitted_from or submitted_to:
        window = SearchRange.from_date(
            RangeField.SUBMITTED_DATE,
            submitted_from or "1991-01-01",
            submitted_to or "9999-12-31",
        )
        terms.append(replace(window, end=window.end.replace(hour=23, minute=59, second=59)))

    query = ArxivQuery(start=start, max_results=max_results)

    if raw_query and terms:
        raise ValueError(
            "a raw query cannot be combined with --title, --author, --abstract, "
            "--category or date options; put every condition in the raw query"
        )

    if terms:
        query = query.with_search_query(terms[0] if len(terms) == 1 else and_all(terms))
    elif raw_query:
        query = query.with_search_query(raw_query)

    if ids:
        query = query.with_id_list(ids)
    if sort_by:
        query = query.with_sort_by(SortBy(sort_by))
    if sort_order:
        query = query.with_sort_order(SortOrder(sort_order))

    return query


@app.command()
def search(
    query: Annotated[
        str,
        typer.Argument(
            help="Raw arXiv query, e.g. 'ti:RAG AND au:Doe' (not combinable with field options)",
        ),
    ] = None,
    title: Annotated[
        str,
        typer.Option("--title", "-t", help="Search in titles"),
    ] = None,
    author: Annotated[
        str,
        typer.Option("--author", "-a", help="Search by author"),
    ] = None,
    abstract: Annotated[
        str,
        typer.Option("--abstract", help="Search in abstracts"),
    ] = None,
    categories: Annotated[
        list[str],
        typer.Option(
            "--category", "-c",
            help="arXiv categories (e.g., cs.LG); repeat to require several",
        ),
    ] = None,
    submitted_from: Annotated[
        str,
        typer.Option("--submitted-from", help="Earliest submission date (YYYY-MM-DD)"),
    ] = None,
    submitted_to: Annotated[
        str,
        typer.Option("--submitted-to", help="Latest submission date (YYYY-MM-DD), inclusive"),
    ] = None,
    ids: Annotated[
        list[str],
        typer.Option("--id", help="Restrict to arXiv IDs (repeatable)"),
    ] = None,
    start: Annotated[
        int,
        typer.Option("--start", help="Offset of the first result"),
    ] = 0,
    max_results: Annotated[
        int,
        typer.Option("--max-results", "-n", help="Maximum number of results"),
    ] = 10,
    sort_by: Annotated[
        str,
        typer.Option("--sort-by", help="relevance, lastUpdatedDate or submittedDate"),
    ] = None,
    sort_order: Annotated[
        str,
        typer.Option("--sort-order", help="ascending or descending"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    profile: Annotated[
        str,
        typer.Option("--profile", "-p", help="Client profile from arxiv_query.yaml"),
    ] = None,
):
    """
    Search arXiv.

    Examples:

        # Raw query
        arxiv-query search "ti:RAG AND cat:cs.CL"

        # Field options are ANDed together
        arxiv-query search --title transformer --category cs.LG -n 20

        # Date window, newest first, as JSON
        arxiv-query search -t diffusion --submitted-from 2024-01-01 \\
            --sort-by submittedDate --sort-order descending --format json
    """
    setup_logging()

    valid_sort_by = {s.value for s in SortBy}
    if sort_by and sort_by not in valid_sort_by:
        typer.echo(f"Error: --sort-by must be one of: {sorted(valid_sort_by)}", err=True)
        raise typer.Exit(1)

    valid_sort_order = {s.value for s in SortOrder}
    if sort_order and sort_order not in valid_sort_order:
        typer.echo(f"Error: --sort-order must be one of: {sorted(valid_sort_order)}", err=True)
        raise typer.Exit(1)

    if output_format not in ("text", "json"):
        typer.echo("Error: --format must be text or json", err=True)
        raise typer.Exit(1)

    try:
        arxiv_query = build_query(
            raw_query=query,
            title=title,
            author=author,
            abstract=abstract,
            categories=categories,
            submitted_from=submitted_from,
            submitted_to=submitted_to,
            ids=ids,
            start=start,
            max_results=max_results,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    config = _load_profile(profile)
    try:
        results = asyncio.run(_search_async(arxiv_query, config))
    except ArxivError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _print_results(results, output_format)


@app.command()
def fetch(
    arxiv_ids: Annotated[
        list[str],
        typer.Argument(help="arXiv IDs to fetch (e.g., 2402.16893v1)"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    profile: Annotated[
        str,
        typer.Option("--profile", "-p", help="Client profile from arxiv_query.yaml"),
    ] = None,
):
    """
    Fetch specific papers by arXiv ID.

    Examples:

        arxiv-query fetch 2402.16893v1 2301.00001 --format json
    """
    setup_logging()

    arxiv_query = ArxivQuery().with_id_list(arxiv_ids).with_max_results(len(arxiv_ids))
    config = _load_profile(profile)
    try:
        results = asyncio.run(_search_async(arxiv_query, config))
    except ArxivError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _print_results(results, output_format)


def _load_profile(profile: str | None) -> ClientConfig:
    try:
        return load_config(profile=profile)
    except (KeyError, ValueError) as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(1)


async def _search_async(query: ArxivQuery, config: ClientConfig) -> list[ArxivResult]:
    """Async implementation of search and fetch."""
    async with ArxivClient.from_config(config) as client:
        return await client.search(query)


def _print_results(results: list[ArxivResult], output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    if not results:
        typer.echo("No papers found.")
        return

    typer.echo(f"Found {len(results)} papers:\n")
    for i, r in enumerate(results, 1):
        typer.echo(f"{i}. {' '.join(r.title.split())}")
        typer.echo(f"   Published: {r.published.date()} | Category: {r.primary_category}")
        if r.authors:
            authors = ", ".join(r.authors[:3])
            if len(r.authors) > 3:
                authors += f" (+{len(r.authors) - 3} more)"
            typer.echo(f"   Authors: {authors}")
        typer.echo(f"   ID: {r.id}")
        if r.pdf_url:
            typer.echo(f"   PDF: {r.pdf_url}")
        typer.echo()


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
