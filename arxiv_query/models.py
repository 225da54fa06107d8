"""Pydantic models for arXiv Atom feed entries and flattened results."""

import logging
import warnings
from datetime import datetime

from pydantic import BaseModel, Field

from .errors import AmbiguousPdfLinkWarning

logger = logging.getLogger(__name__)


class Author(BaseModel):
    """Entry author."""

    name: str


class Link(BaseModel):
    """Entry link (abstract page, PDF, DOI resolver, ...)."""

    title: str | None = None
    rel: str
    href: str
    content_type: str | None = Field(None, alias="type")

    model_config = {"populate_by_name": True}


class Category(BaseModel):
    """Subject category; the scheme is kept on the wire model only."""

    term: str
    scheme: str | None = None


class Entry(BaseModel):
    """One <entry> of the feed, before flattening."""

    id: str
    title: str
    summary: str
    updated: datetime
    published: datetime
    authors: list[Author] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    primary_category: Category
    categories: list[Category] = Field(default_factory=list)
    doi: str | None = None
    comment: str | None = None
    journal_ref: str | None = None

    def pdf_url(self) -> str | None:
        """Href of the first link titled "pdf", warning if there are several."""
        pdf_links = [link for link in self.links if link.title == "pdf"]
        if not pdf_links:
            return None

        if len(pdf_links) > 1:
            logger.warning(
                f"Multiple pdf links found for entry {self.id}, using {pdf_links[0].href}"
            )
            warnings.warn(
                f"Multiple pdf links found for entry: {self.id}",
                AmbiguousPdfLinkWarning,
                stacklevel=2,
            )

        return pdf_links[0].href


class Feed(BaseModel):
    """Parsed response document."""

    entries: list[Entry] = Field(default_factory=list)
    total_results: int | None = None
    start_index: int | None = None
    items_per_page: int | None = None


class ArxivResult(BaseModel):
    """Search result as returned to callers."""

    id: str
    title: str
    summary: str
    authors: list[str] = Field(default_factory=list)

    doi: str | None = None
    comment: str | None = None
    journal_ref: str | None = None

    primary_category: str
    categories: list[str] = Field(default_factory=list)

    pdf_url: str | None = None
    links: list[Link] = Field(default_factory=list)

    published: datetime
    updated: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entry(cls, entry: Entry) -> "ArxivResult":
        """Flatten a feed entry into a result record."""
        return cls(
            id=entry.id,
            title=entry.title,
            summary=entry.summary,
            authors=[author.name for author in entry.authors],
            doi=entry.doi,
            comment=entry.comment,
            journal_ref=entry.journal_ref,
            primary_category=entry.primary_category.term,
            categories=[category.term for category in entry.categories],
            pdf_url=entry.pdf_url(),
            links=entry.links,
            published=entry.published,
            updated=entry.updated,
        )
