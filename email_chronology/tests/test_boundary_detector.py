import pytest

from email_chronology.boundary_detector import (
    HEADER_START,
    QUOTE_INTRODUCER,
    SEPARATOR,
    BoundaryDetector,
    default_rules,
)


@pytest.fixture
def detector(logger):
    return BoundaryDetector(logger, lookahead_lines=5)


def test_plain_body_has_no_boundaries(detector):
    body = "Hi team,\n\nThe report is attached.\n-- \nAlice"
    assert detector.detect(body) == []


def test_first_from_line_needs_no_lookahead(detector):
    assert detector.detect("Hello\nFrom: someone\nbye") == [6]


def test_later_from_line_without_headers_is_body_text(detector):
    body = "From: x@y.com\nTo: z@y.com\n\nI got a letter\nFrom: the bank\nthat said hello"
    assert detector.detect(body) == [0]


def test_lookahead_window(detector):
    near = "On x wrote:\nFrom: a@x.com\n1\n2\n3\n4\nTo: b@x.com"
    far = "On x wrote:\nFrom: a@x.com\n1\n2\n3\n4\n5\nTo: b@x.com"
    assert detector.detect(near) == [0, 12]
    assert detector.detect(far) == [0]


def test_from_without_value_is_not_a_boundary(detector):
    assert detector.detect("From:\n\nnothing here") == []


def test_header_start_is_case_insensitive(detector):
    assert detector.detect("FROM: a@x.com\nSUBJECT: hi") == [0]


def test_quote_introducer_marks_its_own_line(detector):
    body = "Sounds good.\n\nOn Jul 11, 2025, at 11:22 AM, X <x@y.com> wrote:\n> see you"
    assert detector.detect(body) == [14]


def test_quote_introducer_must_end_with_wrote(detector):
    assert detector.detect("On Monday we wrote: the plan\nthen left") == []


@pytest.mark.parametrize("separator", ["_" * 32, "-" * 20, "_-" * 10, "   " + "_" * 25 + "  "])
def test_separator_boundary_follows_the_line(detector, separator):
    body = f"abc\n{separator}\nnext"
    assert detector.detect(body) == [4 + len(separator) + 1]


@pytest.mark.parametrize("short", ["_" * 19, "-" * 19, "=" * 30])
def test_short_or_other_rules_are_ignored(detector, short):
    assert detector.detect(f"abc\n{short}\nnext") == []


def test_separator_then_header_gives_duplicate_offsets(detector, outlook_chain):
    boundaries = detector.scan(outlook_chain)
    assert [b.kind for b in boundaries] == [HEADER_START, SEPARATOR, HEADER_START]
    assert boundaries[0].offset == 0
    assert boundaries[1].offset == boundaries[2].offset
    assert outlook_chain[boundaries[1].offset:].startswith("From: Bob")


def test_offsets_are_non_decreasing(detector, outlook_chain):
    body = outlook_chain + "\n\nOn Tue, Jan 7, 2025 Bob <b@x.com> wrote:\n" + "-" * 24 + "\nold text"
    offsets = detector.detect(body)
    assert offsets == sorted(offsets)
    assert len(offsets) == 5


def test_rules_are_swappable(logger):
    separators_only = [rule for rule in default_rules() if rule.kind == SEPARATOR]
    detector = BoundaryDetector(logger, rules=separators_only)
    body = "From: a@x.com\nTo: b@x.com\n" + "_" * 30 + "\nOn x wrote:"
    assert detector.scan(body) == [(len("From: a@x.com\nTo: b@x.com\n") + 31, SEPARATOR)]


def test_separator_length_is_configurable(logger):
    detector = BoundaryDetector(logger, rules=default_rules(separator_min_length=5))
    assert detector.detect("a\n-----\nb") == [8]


def test_quote_introducer_kind(detector):
    assert detector.scan("On Mon, Jan 6 Alice wrote:")[0].kind == QUOTE_INTRODUCER
