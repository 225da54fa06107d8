"""
Predicate Algebra Tests

Rendering of terms, ranges and composite predicates into the arXiv query grammar.
"""

from datetime import datetime, timedelta, timezone

import pytest

from arxiv_query.search_query import (
    And,
    RangeField,
    QueryNode,
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

RAG = SearchTerm(SearchField.TITLE, "RAG")
DOE = SearchTerm(SearchField.AUTHOR, "John Doe")
LOREM = SearchTerm(SearchField.ABSTRACT, "Lorem Ipsum")

EPOCH_RANGE = (
    "lastUpdatedDate:[1970-01-01T00:00:00.000000000Z TO 1970-01-01T00:16:40.000000000Z]"
)


def test_search_term():
    """A term renders as field:term, with or without display stripping."""
    assert RAG.render() == "ti:RAG"
    assert RAG.display() == "ti:RAG"
    assert str(RAG) == "ti:RAG"


def test_search_field_tokens():
    tokens = {field.value for field in SearchField}
    assert tokens == {"ti", "au", "abs", "co", "jr", "cat", "rn", "doi", "all"}
    assert RangeField.SUBMITTED_DATE.value == "submittedDate"


def test_search_range():
    start = datetime.fromtimestamp(0, tz=timezone.utc)
    end = datetime.fromtimestamp(1000, tz=timezone.utc)
    search_range = SearchRange(RangeField.LAST_UPDATED_DATE, start, end)

    assert search_range.render() == EPOCH_RANGE
    assert str(search_range) == EPOCH_RANGE


def test_search_range_keeps_non_utc_offset():
    tz = timezone(timedelta(hours=2))
    start = datetime(2024, 1, 1, 12, 0, 0, 500000, tzinfo=tz)
    end = datetime(2024, 1, 2, tzinfo=tz)
    search_range = SearchRange(RangeField.SUBMITTED_DATE, start, end)

    assert search_range.render() == (
        "submittedDate:[2024-01-01T12:00:00.500000000+02:00 TO "
        "2024-01-02T00:00:00.000000000+02:00]"
    )


def test_search_range_from_rfc_3339():
    search_range = SearchRange.from_rfc_3339(
        RangeField.LAST_UPDATED_DATE, "1970-01-01T00:00:00Z", "1970-01-01T00:16:40Z"
    )
    assert search_range.render() == EPOCH_RANGE


def test_search_range_from_iso_8601():
    search_range = SearchRange.from_iso_8601(
        RangeField.LAST_UPDATED_DATE,
        "1970-01-01T00:00:00.000000000Z",
        "1970-01-01T00:16:40+00:00",
    )
    assert search_range.render() == EPOCH_RANGE


def test_sub_microsecond_digits_are_truncated():
    search_range = SearchRange.from_iso_8601(
        RangeField.LAST_UPDATED_DATE,
        "2024-01-01T00:00:00.123456789Z",
        "2024-01-01T00:00:01.5Z",
    )
    assert search_range.render() == (
        "lastUpdatedDate:[2024-01-01T00:00:00.123456000Z TO "
        "2024-01-01T00:00:01.500000000Z]"
    )


def test_search_range_from_rfc_2822():
    search_range = SearchRange.from_rfc_2822(
        RangeField.LAST_UPDATED_DATE,
        "Thu, 01 Jan 1970 00:00:00 +0000",
        "Thu, 01 Jan 1970 00:16:40 +0000",
    )
    assert search_range.render() == EPOCH_RANGE


def test_search_range_from_date():
    search_range = SearchRange.from_date(
        RangeField.SUBMITTED_DATE, "2024-01-01", "2024-01-31"
    )
    assert search_range.render() == (
        "submittedDate:[2024-01-01T00:00:00.000000000Z TO "
        "2024-01-31T00:00:00.000000000Z]"
    )


@pytest.mark.parametrize(
    "constructor, start",
    [
        (SearchRange.from_rfc_3339, "2024-01-01"),
        (SearchRange.from_rfc_3339, "2024-01-01T00:00:00"),
        (SearchRange.from_iso_8601, "yesterday"),
        (SearchRange.from_rfc_2822, "2024-01-01"),
        (SearchRange.from_date, "01/02/2024"),
    ],
)
def test_search_range_rejects_bad_input(constructor, start):
    with pytest.raises(ValueError):
        constructor(RangeField.SUBMITTED_DATE, start, "2024-12-31T00:00:00Z")


def test_simple_and_predicate():
    predicate = and_(RAG, DOE)
    assert predicate.render() == "(ti:RAG AND au:John Doe)"
    assert str(predicate) == "ti:RAG AND au:John Doe"


def test_simple_or_predicate():
    predicate = or_(RAG, DOE)
    assert predicate.render() == "(" + RAG.render() + " OR " + DOE.render() + ")"


def test_and_or_predicate():
    """Only the outermost bracket pair is stripped by display()."""
    predicate = or_(and_(RAG, DOE), LOREM)
    assert predicate.render() == "((ti:RAG AND au:John Doe) OR abs:Lorem Ipsum)"
    assert predicate.display() == "(ti:RAG AND au:John Doe) OR abs:Lorem Ipsum"


def test_and_not_predicate():
    predicate = and_not(RAG, DOE)
    assert predicate.render() == "(ti:RAG ANDNOT au:John Doe)"
    assert predicate.display() == "ti:RAG ANDNOT au:John Doe"


def test_bracket_is_never_flattened():
    inner = and_(RAG, DOE)
    assert bracket(RAG).render() == "(ti:RAG)"
    assert bracket(inner).render() == "((ti:RAG AND au:John Doe))"
    assert bracket(inner).display() == "(ti:RAG AND au:John Doe)"
    assert bracket(bracket(RAG)).render() == "((ti:RAG))"


def test_and_all_and_or_all():
    assert and_all([RAG, DOE, LOREM]).render() == (
        "(ti:RAG AND au:John Doe AND abs:Lorem Ipsum)"
    )
    assert or_all([RAG]).render() == "(ti:RAG)"


def test_and_all_accepts_generators():
    predicate = and_all(SearchTerm(SearchField.SUBJECT_CATEGORY, c) for c in ("cs.LG", "cs.AI"))
    assert predicate.render() == "(cat:cs.LG AND cat:cs.AI)"


def test_empty_composites_are_rejected():
    with pytest.raises(ValueError):
        and_all([])
    with pytest.raises(ValueError):
        or_all([])


def test_operator_sugar():
    assert (RAG & DOE) == and_(RAG, DOE)
    assert (RAG | DOE).render() == "(ti:RAG OR au:John Doe)"
    assert ((RAG & DOE) | LOREM).render() == or_(and_(RAG, DOE), LOREM).render()


def test_nested_ranges_and_predicates():
    window = SearchRange.from_date(RangeField.SUBMITTED_DATE, "2024-01-01", "2024-01-31")
    predicate = and_not(and_(RAG, window), bracket(DOE))
    assert predicate.render() == (
        "((ti:RAG AND submittedDate:[2024-01-01T00:00:00.000000000Z TO "
        "2024-01-31T00:00:00.000000000Z]) ANDNOT (au:John Doe))"
    )


def test_predicates_are_immutable_values():
    predicate = And((RAG, DOE))
    assert predicate == and_(RAG, DOE)
    with pytest.raises(AttributeError):
        predicate.operands = ()


def test_display_strips_the_pair_render_added():
    """Unbalanced parentheses inside a term do not confuse display()."""
    odd = SearchTerm(SearchField.ALL, "a) OR (b")
    assert odd.display() == "all:a) OR (b"
    assert bracket(odd).render() == "(all:a) OR (b)"
    assert bracket(odd).display() == "all:a) OR (b"

    left = SearchTerm(SearchField.TITLE, "f(x")
    right = SearchTerm(SearchField.TITLE, "y)")
    assert and_(left, right).display() == "ti:f(x AND ti:y)"
    assert or_(bracket(left), right).display() == "(ti:f(x) OR ti:y)"


def test_composites_share_a_predicate_base():
    assert isinstance(and_(RAG, DOE), SearchPredicate)
    assert isinstance(bracket(RAG), SearchPredicate)
    assert not isinstance(RAG, SearchPredicate)


def test_query_node_is_abstract():
    with pytest.raises(TypeError):
        QueryNode()
