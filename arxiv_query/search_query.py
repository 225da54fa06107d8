"""Composable search expressions for the arXiv query grammar.

Leaf expressions are field terms (``ti:RAG``) and date ranges
(``submittedDate:[... TO ...]``). Composite predicates combine them with
AND / OR / ANDNOT and always bracket their contents, so the rendered query is
unambiguous at any nesting depth.

Usage:
    from arxiv_query.search_query import SearchField, SearchTerm, and_, or_

    rag = SearchTerm(SearchField.TITLE, "RAG")
    doe = SearchTerm(SearchField.AUTHOR, "John Doe")
    query = or_(and_(rag, doe), SearchTerm(SearchField.ABSTRACT, "retrieval"))

    query.render()   # "((ti:RAG AND au:John Doe) OR abs:retrieval)"
    query.display()  # "(ti:RAG AND au:John Doe) OR abs:retrieval"
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum


class SearchField(Enum):
    """Searchable metadata fields and their query prefixes."""

    TITLE = "ti"
    AUTHOR = "au"
    ABSTRACT = "abs"
    COMMENT = "co"
    JOURNAL_REFERENCE = "jr"
    SUBJECT_CATEGORY = "cat"
    REPORT_NUMBER = "rn"
    DOI = "doi"
    ALL = "all"


class RangeField(Enum):
    """Date fields that accept a range filter."""

    LAST_UPDATED_DATE = "lastUpdatedDate"
    SUBMITTED_DATE = "submittedDate"


_RFC_3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)
_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO 8601 with nanosecond precision.

    Example: 1970-01-01T00:16:40.000000000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    stamp = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond * 1000:09d}"
    )

    offset = value.utcoffset()
    if not offset:
        return stamp + "Z"

    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{stamp}{sign}{hours:02d}:{minutes:02d}"


def _as_utc_aware(value: datetime) -> datetime:
    # Inputs without an offset are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_iso_8601(value: str) -> datetime:
    text = value.strip().upper()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # datetime only keeps microseconds; extra digits are dropped, not rounded
    text = _FRACTION_PATTERN.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        return _as_utc_aware(datetime.fromisoformat(text))
    except ValueError as e:
        raise ValueError(f"Invalid ISO 8601 timestamp: {value!r}") from e


def _parse_rfc_3339(value: str) -> datetime:
    if not _RFC_3339_PATTERN.match(value.strip()):
        raise ValueError(f"Invalid RFC 3339 timestamp: {value!r}")
    return _parse_iso_8601(value)


def _parse_rfc_2822(value: str) -> datetime:
    try:
        return _as_utc_aware(parsedate_to_datetime(value))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid RFC 2822 timestamp: {value!r}") from e


def _parse_date(value: str) -> datetime:
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from e
    return parsed.replace(tzinfo=timezone.utc)


class QueryNode(ABC):
    """Base class for every search expression node."""

    @abstractmethod
    def render(self) -> str:
        """Query-string form sent to the API."""

    def display(self) -> str:
        """Human-readable form. Leaves have no brackets to strip."""
        return self.render()

    def __str__(self) -> str:
        return self.display()

    def __and__(self, other: QueryNode) -> And:
        return and_(self, other)

    def __or__(self, other: QueryNode) -> Or:
        return or_(self, other)


@dataclass(frozen=True)
class SearchTerm(QueryNode):
    """A single field term, rendered as ``field:term``."""

    field: SearchField
    term: str

    def render(self) -> str:
        return f"{self.field.value}:{self.term}"


@dataclass(frozen=True)
class SearchRange(QueryNode):
    """An inclusive date window on a range field."""

    field: RangeField
    start: datetime
    end: datetime

    def render(self) -> str:
        return (
            f"{self.field.value}:"
            f"[{format_timestamp(self.start)} TO {format_timestamp(self.end)}]"
        )

    @classmethod
    def from_iso_8601(cls, field: RangeField, start: str, end: str) -> SearchRange:
        """Build a range from ISO 8601 timestamps (e.g. "2024-01-01T00:00:00Z").

        datetime holds microseconds, so fractional seconds past the sixth digit
        are truncated: ".123456789Z" renders as ".123456000Z".
        """
        return cls(field, _parse_iso_8601(start), _parse_iso_8601(end))

    @classmethod
    def from_rfc_3339(cls, field: RangeField, start: str, end: str) -> SearchRange:
        """Build a range from strict RFC 3339 timestamps (offset required).

        Fractions are truncated to microseconds, as in from_iso_8601().
        """
        return cls(field, _parse_rfc_3339(start), _parse_rfc_3339(end))

    @classmethod
    def from_rfc_2822(cls, field: RangeField, start: str, end: str) -> SearchRange:
        """Build a range from mail-style dates (e.g. "Mon, 01 Jan 2024 00:00:00 +0000")."""
        return cls(field, _parse_rfc_2822(start), _parse_rfc_2822(end))

    @classmethod
    def from_date(cls, field: RangeField, start: str, end: str) -> SearchRange:
        """Build a range from plain YYYY-MM-DD dates, at midnight UTC."""
        return cls(field, _parse_date(start), _parse_date(end))


class SearchPredicate(QueryNode):
    """Composite expression. Always renders wrapped in one pair of parentheses."""

    def display(self) -> str:
        # The outer pair is the one render() added, whatever the terms contain
        return self.render()[1:-1]


@dataclass(frozen=True)
class And(SearchPredicate):
    """Conjunction of one or more expressions."""

    operands: tuple[QueryNode, ...]

    def render(self) -> str:
        return "(" + " AND ".join(op.render() for op in self.operands) + ")"


@dataclass(frozen=True)
class Or(SearchPredicate):
    """Disjunction of one or more expressions."""

    operands: tuple[QueryNode, ...]

    def render(self) -> str:
        return "(" + " OR ".join(op.render() for op in self.operands) + ")"


@dataclass(frozen=True)
class AndNot(SearchPredicate):
    """Matches ``lhs`` but not ``rhs``."""

    lhs: QueryNode
    rhs: QueryNode

    def render(self) -> str:
        return f"({self.lhs.render()} ANDNOT {self.rhs.render()})"


@dataclass(frozen=True)
class Bracket(SearchPredicate):
    """Explicit grouping; always adds a pair of parentheses."""

    inner: QueryNode

    def render(self) -> str:
        return f"({self.inner.render()})"


def and_(lhs: QueryNode, rhs: QueryNode) -> And:
    return And((lhs, rhs))


def and_all(nodes: Iterable[QueryNode]) -> And:
    operands = tuple(nodes)
    if not operands:
        raise ValueError("and_all() requires at least one expression")
    return And(operands)


def or_(lhs: QueryNode, rhs: QueryNode) -> Or:
    return Or((lhs, rhs))


def or_all(nodes: Iterable[QueryNode]) -> Or:
    operands = tuple(nodes)
    if not operands:
        raise ValueError("or_all() requires at least one expression")
    return Or(operands)


def and_not(lhs: QueryNode, rhs: QueryNode) -> AndNot:
    return AndNot(lhs, rhs)


def bracket(node: QueryNode) -> Bracket:
    return Bracket(node)
