import json
import sys

import pytest

from email_chronology import cli, create_chain_parser
from email_chronology.app import EmailChronologyApp
from email_chronology.converters import HtmlToTextConverter
from email_chronology.envelope import EnvelopeBuilder
from email_chronology.errors import FileTooLargeError, MessageParseError, UnsupportedFileError
from email_chronology.interfaces import MessageFileReader
from email_chronology.models import DecodedMessage, Recipient
from email_chronology.notifications import NotificationCenter
from email_chronology.parser import EmailChronologyParser
from email_chronology.timeline import EmailTimeline


class _FakeReader(MessageFileReader):
    """Serves DecodedMessages by filename instead of decoding real .msg files."""

    def __init__(self, messages):
        self.messages = messages

    def can_read(self, data, filename=None):
        return (filename in self.messages or filename == "broken.msg"), 1.0

    def read(self, data, filename=None):
        if filename == "broken.msg":
            raise MessageParseError(filename, "not an OLE2 structured storage file")
        return self.messages[filename]


@pytest.fixture
def messages(outlook_chain):
    return {
        "thread.msg": DecodedMessage(
            subject="Re: Hi",
            sender_name="Bob",
            sender_email="b@x.com",
            recipients=[Recipient("Alice", "a@x.com", 1)],
            body=outlook_chain,
        ),
        "memo.msg": DecodedMessage(
            subject="Memo",
            sender_name="Dana",
            sender_email="d@x.com",
            delivery_time="Sunday, January 5, 2025 8:00 AM",
            body="Plain memo, nothing quoted.",
            attachments=["memo.pdf"],
        ),
    }


@pytest.fixture
def parser(logger, messages):
    return EmailChronologyParser(
        [_FakeReader(messages)],
        EnvelopeBuilder(logger, HtmlToTextConverter(logger)),
        create_chain_parser(logger),
        logger,
        max_file_size_mb=1,
    )


@pytest.fixture
def app(logger, parser):
    return EmailChronologyApp(parser, EmailTimeline(logger), NotificationCenter(logger), logger)


@pytest.fixture
def files(tmp_path, messages):
    paths = {}
    for name in list(messages) + ["broken.msg", "unknown.msg", "notes.txt"]:
        path = tmp_path / name
        path.write_bytes(b"placeholder")
        paths[name] = path
    return paths


def test_chain_file_yields_chain(parser, files):
    emails = parser.parse_file(files["thread.msg"])
    assert [e.sender for e in emails] == ["Alice <a@x.com>", "Bob <b@x.com>"]


def test_plain_file_yields_top_level_email(parser, files):
    [email] = parser.parse_file(files["memo.msg"])
    assert email.sender == "Dana <d@x.com>"
    assert email.subject == "Memo"
    assert email.date.year == 2025
    assert email.attachments == ["memo.pdf"]


def test_parser_errors(parser, files, tmp_path):
    with pytest.raises(UnsupportedFileError):
        parser.parse_file(files["unknown.msg"])
    with pytest.raises(MessageParseError):
        parser.parse_file(files["broken.msg"])
    with pytest.raises(MessageParseError):
        parser.parse_file(tmp_path / "missing.msg")
    with pytest.raises(FileTooLargeError):
        parser.parse(b"x" * (1024 * 1024 + 1), "thread.msg")


def test_timeline_across_files(app, files):
    reports = app.handle_files([files["thread.msg"], files["memo.msg"]])

    assert [(r.filename, r.added, r.duplicates) for r in reports] == [("thread.msg", 2, 0), ("memo.msg", 1, 0)]
    assert [e.subject for e in app.timeline.sorted_emails()] == ["Memo", "Hi", "Re: Hi"]
    assert app.notifications.notifications == []


def test_reloading_reports_duplicates(app, files):
    app.handle_files([files["thread.msg"]])
    [report] = app.handle_files([files["thread.msg"]])

    assert (report.added, report.duplicates) == (0, 2)
    [notice] = app.notifications.notifications
    assert notice.title == "Duplicate Email"
    assert notice.message == '"thread.msg" contained 2 emails that have already been added.'


def test_rejected_and_broken_files(app, files):
    reports = app.handle_files([files["notes.txt"], files["broken.msg"], files["memo.msg"]])

    assert [r.filename for r in reports] == ["notes.txt", "broken.msg", "memo.msg"]
    assert reports[0].error["error"]["code"] == "UNSUPPORTED_FORMAT"
    assert reports[1].error["error"]["code"] == "PARSING_ERROR"
    assert reports[1].error["error"]["details"] == "Failed to parse broken.msg: not an OLE2 structured storage file"
    assert reports[2].success
    assert [n.title for n in app.notifications.notifications] == ["Invalid File Type", "Parsing Error"]


def test_size_and_format_errors_get_their_own_codes(app, files, tmp_path):
    huge = tmp_path / "huge.msg"
    huge.write_bytes(b"x" * (1024 * 1024 + 1))

    too_large, unsupported = app.handle_files([huge, files["unknown.msg"]])

    assert too_large.error["error"]["code"] == "FILE_TOO_LARGE"
    assert too_large.error["error"]["details"] == "File size: 1048577 bytes, Maximum allowed: 1048576 bytes"
    assert unsupported.error["error"]["code"] == "UNSUPPORTED_FORMAT"
    assert [n.title for n in app.notifications.notifications] == ["Message file exceeds size limit", "Invalid File Type"]


def test_failure_while_adding_keeps_file_out_of_timeline(app, files, monkeypatch):
    add_email = app.timeline.add_email
    calls = []

    def flaky_add(email):
        calls.append(email)
        if len(calls) == 2:
            raise ValueError("bad date")
        return add_email(email)

    monkeypatch.setattr(app.timeline, "add_email", flaky_add)
    [report] = app.handle_files([files["thread.msg"]])

    assert report.error["error"]["code"] == "INTERNAL_ERROR"
    assert (report.added, report.duplicates) == (0, 0)
    assert app.timeline.count == 0
    assert app.export()["files"][0]["success"] is False


def test_clear_all(app, files):
    app.handle_files([files["thread.msg"], files["notes.txt"]])
    assert app.clear_all() == 2
    assert app.timeline.count == 0
    assert app.notifications.notifications == []


def test_export_is_json_ready(app, files):
    app.handle_files([files["thread.msg"], files["memo.msg"]])
    exported = json.loads(json.dumps(app.export()))

    assert exported["email_count"] == 3
    assert [g["source_label"] for g in exported["groups"]] == ["memo.msg", "thread.msg"]
    assert exported["groups"][1]["emails"][0]["from"] == "Alice <a@x.com>"
    assert exported["groups"][1]["emails"][0]["date"] == "2025-01-06T09:26:00+00:00"


def test_cli_rejects_unsupported_files(tmp_path, monkeypatch, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    monkeypatch.setattr(sys, "argv", ["email-chronology", str(path), "--format", "json"])

    assert cli.main() == 1
    out = capsys.readouterr().out
    assert '"email_count": 0' in out
    assert "Invalid File Type" in out
