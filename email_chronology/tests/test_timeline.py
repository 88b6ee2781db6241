from datetime import datetime, timezone

import pytest

from email_chronology.models import ExtractedEmail
from email_chronology.timeline import EmailTimeline, email_identity


def _email(subject, day=None, source="a.msg", body="text"):
    date = datetime(2025, 1, day, tzinfo=timezone.utc) if day else None
    return ExtractedEmail(sender="a@x.com", subject=subject, date=date, body=body, source_label=source)


@pytest.fixture
def timeline(logger):
    return EmailTimeline(logger)


def test_identity():
    email = _email("Hi", day=6, body="x" * 150)
    assert email_identity(email) == "2025-01-06T00:00:00+00:00|||Hi|||a@x.com|||" + "x" * 100
    assert email_identity(ExtractedEmail()) == "|||" * 3


def test_duplicates_rejected(timeline):
    assert timeline.add_email(_email("Hi", day=6))
    assert not timeline.add_email(_email("Hi", day=6, source="b.msg"))
    assert timeline.count == 1


def test_only_body_prefix_counts(timeline):
    assert timeline.add_email(_email("Hi", day=6, body="y" * 100 + "tail one"))
    assert not timeline.add_email(_email("Hi", day=6, body="y" * 100 + "tail two"))


def test_sorted_earliest_first_with_undated_at_start(timeline):
    for email in (_email("third", day=9), _email("undated"), _email("first", day=2), _email("second", day=5)):
        timeline.add_email(email)
    assert [e.subject for e in timeline.sorted_emails()] == ["undated", "first", "second", "third"]


def test_naive_dates_sort_alongside_aware(timeline):
    timeline.add_email(_email("aware", day=3))
    timeline.add_email(ExtractedEmail(sender="a@x.com", subject="naive", date=datetime(2025, 1, 1)))
    assert [e.subject for e in timeline.sorted_emails()] == ["naive", "aware"]


def test_group_by_source_in_first_seen_order(timeline):
    timeline.add_email(_email("b1", day=4, source="b.msg"))
    timeline.add_email(_email("a1", day=1, source="a.msg"))
    timeline.add_email(_email("b0", day=2, source="b.msg"))
    timeline.add_email(_email("x", day=3, source=""))

    groups = timeline.group_by_source()
    assert [g.source_label for g in groups] == ["a.msg", "b.msg", "Unknown"]
    assert [e.subject for e in groups[1].emails] == ["b0", "b1"]


def test_clear(timeline):
    timeline.add_email(_email("Hi", day=6))
    timeline.clear()
    assert timeline.count == 0
    assert timeline.group_by_source() == []
