"""Tests for callout parsing."""

from calloutsync.core.parser import (
    find_at_or_above,
    find_by_start_line,
    find_closest,
    find_containing,
    is_start_line,
    iter_callouts,
    parse_document,
    parse_header,
    split_lines,
)

NESTED_DOC = """# Heading
> [!note] Outer
> text
> > [!tip]- First
> > tip body
> > [!warning] Second
> > > [!bug]+ Deep
> > > deep body
> > after deep
> outer tail

> [!quote] Last"""


def _ranges(callouts):
    return [(c.type, c.start_line, c.end_line) for c in iter_callouts(callouts)]


def test_single_collapsed_callout():
    """Test a collapsed callout with one body line."""
    callouts = parse_document("> [!note]- Title\n> body\n")
    
    assert len(callouts) == 1
    c = callouts[0]
    assert c.type == "note"
    assert c.title == "Title"
    assert c.is_collapsed is True
    assert c.start_line == 0
    assert c.end_line == 1
    assert c.content == "body"
    assert c.raw_line == "> [!note]- Title"
    assert c.nested_callouts == ()


def test_nested_callout():
    """Test that a deeper-quoted header nests inside its parent."""
    text = "> [!note]+ Outer\n> > [!tip]- Inner\n> > inner body\n> outer body\n"
    callouts = parse_document(text)
    
    assert len(callouts) == 1
    outer = callouts[0]
    assert (outer.start_line, outer.end_line) == (0, 3)
    assert outer.is_collapsed is False
    assert outer.content == "> [!tip]- Inner\n> inner body\nouter body"
    
    assert len(outer.nested_callouts) == 1
    inner = outer.nested_callouts[0]
    assert (inner.start_line, inner.end_line) == (1, 2)
    assert inner.is_collapsed is True
    assert inner.title == "Inner"
    assert inner.content == "inner body"
    assert inner.raw_line == "> > [!tip]- Inner"


def test_adjacent_identical_headers_are_siblings():
    """Test that two identical headers on consecutive lines stay apart."""
    callouts = parse_document("> [!note]+ Note\n> [!note]+ Note\n")
    
    assert len(callouts) == 2
    assert (callouts[0].start_line, callouts[0].end_line) == (0, 0)
    assert (callouts[1].start_line, callouts[1].end_line) == (1, 1)
    assert callouts[0].content == ""
    assert callouts[0].title == callouts[1].title == "Note"


def test_unquoted_line_ends_callout():
    """Test that a blank or plain line terminates a callout."""
    text = "> [!info] A\n> a body\n\nplain\n> [!warning]- B\n> b\n"
    callouts = parse_document(text)
    
    assert _ranges(callouts) == [("info", 0, 1), ("warning", 4, 5)]
    assert callouts[0].is_collapsed is False
    assert callouts[1].is_collapsed is True


def test_callout_runs_to_end_of_document():
    """Test that a callout without terminator ends at the last line."""
    callouts = parse_document("intro\n> [!note] A\n> one\n> two")
    
    assert _ranges(callouts) == [("note", 1, 3)]


def test_plain_blockquote_is_skipped():
    """Test that quote lines without a callout header are ignored."""
    callouts = parse_document("> just a quote\n> [!note] X\n")
    
    assert _ranges(callouts) == [("note", 1, 1)]


def test_deep_nesting_absolute_lines():
    """Test line numbers at three levels of nesting."""
    callouts = parse_document(NESTED_DOC)
    
    assert _ranges(callouts) == [
        ("note", 1, 9),
        ("tip", 3, 4),
        ("warning", 5, 8),
        ("bug", 6, 7),
        ("quote", 11, 11),
    ]
    bug = find_by_start_line(callouts, 6)
    assert bug is not None
    assert bug.raw_line == "> > > [!bug]+ Deep"
    assert bug.content == "deep body"


def test_parse_is_idempotent():
    """Test that parsing the same text twice yields equal trees."""
    assert parse_document(NESTED_DOC) == parse_document(NESTED_DOC)


def test_nested_ranges_contained_and_disjoint():
    """Test containment of children and disjointness of siblings."""
    def check(siblings):
        for a, b in zip(siblings, siblings[1:]):
            assert a.end_line < b.start_line
        for parent in siblings:
            for child in parent.nested_callouts:
                assert parent.start_line < child.start_line <= child.end_line <= parent.end_line
            check(list(parent.nested_callouts))
    
    check(parse_document(NESTED_DOC))


def test_header_grammar():
    """Test which lines count as callout headers."""
    assert is_start_line("> [!note] Title")
    assert is_start_line(">[!note]- Title")
    assert is_start_line(">   [!my-type]+")
    assert not is_start_line("[!note] no quote")
    assert not is_start_line("> > [!note] nested quote")
    assert not is_start_line("> [!no te] space in type")
    assert not is_start_line("> [!note_x] underscore in type")
    
    assert parse_header("> [!note]x") == ("note", "x", False)
    assert parse_header("> [!Note]-   spaced title  ") == ("Note", "spaced title", True)
    assert parse_header("> [!note]") == ("note", "", False)
    assert parse_header("> plain") is None


def test_empty_document():
    """Test that empty input yields no callouts."""
    assert parse_document("") == []
    assert parse_document("\n\n") == []


def test_lines_split_on_newline_only():
    """Test that form feeds inside a line neither shift nor end a callout."""
    callouts = parse_document("para\x0cmore\n> [!note]- T\n> a\x0cb\n> c\n")
    
    assert [c.line_range for c in callouts] == [(1, 3)]
    assert callouts[0].content == "a\x0cb\nc"


def test_crlf_document():
    """Test that CRLF endings are not part of titles or raw lines."""
    callouts = parse_document("> [!tip]+ Title\r\n> body\r\n\r\n> [!note] Next\r\n")
    
    assert [c.line_range for c in callouts] == [(0, 1), (3, 3)]
    assert callouts[0].raw_line == "> [!tip]+ Title"
    assert callouts[1].title == "Next"


def test_split_lines():
    """Test the line splitter used for every line number."""
    assert split_lines("") == []
    assert split_lines("a\r\nb\n") == ["a", "b"]
    assert split_lines("a b\n\n") == ["a b", ""]


def test_find_containing_returns_innermost():
    """Test containment lookups."""
    callouts = parse_document(NESTED_DOC)
    
    assert find_containing(callouts, 7).type == "bug"
    assert find_containing(callouts, 8).type == "warning"
    assert find_containing(callouts, 9).type == "note"
    assert find_containing(callouts, 10) is None
    assert find_containing(callouts, 0) is None


def test_find_at_or_above_and_closest():
    """Test nearest-header lookups."""
    callouts = parse_document(NESTED_DOC)
    
    assert find_at_or_above(callouts, 10).type == "bug"
    assert find_at_or_above(callouts, 0) is None
    assert find_closest(callouts, 10).type == "quote"
    # tie between Outer (line 1) and First (line 3): first in document order wins
    assert find_closest(callouts, 2).type == "note"
    assert find_closest([], 2) is None
