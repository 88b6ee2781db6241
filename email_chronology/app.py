# ============================================================================
# email_chronology/app.py - Loading files into a timeline
# ============================================================================

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import config
from .errors import ChronologyError, ErrorHandler, FileTooLargeError, UnsupportedFileError
from .notifications import NotificationCenter
from .parser import EmailChronologyParser
from .processing_queue import ProcessingQueue
from .timeline import EmailTimeline


@dataclass
class FileReport:
    filename: str
    added: int = 0
    duplicates: int = 0
    error: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.error is None


class EmailChronologyApp:
    """Queues message files, parses them and merges the results into one timeline."""

    def __init__(self, parser: EmailChronologyParser, timeline: EmailTimeline,
                 notifications: NotificationCenter, logger: logging.Logger,
                 allowed_extensions: Optional[List[str]] = None):
        self.parser = parser
        self.timeline = timeline
        self.notifications = notifications
        self.logger = logger
        self.allowed_extensions = [ext.lower() for ext in (allowed_extensions or config.ALLOWED_EXTENSIONS)]
        self.queue = ProcessingQueue(self.process_file, logger)
        self.reports: List[FileReport] = []

    def handle_files(self, files: Iterable[Any]) -> List[FileReport]:
        """Queue every acceptable file and process the queue; returns reports for this batch."""
        start = len(self.reports)
        accepted = []
        for f in files:
            path = Path(f)
            if path.suffix.lower() in self.allowed_extensions:
                accepted.append(path)
                continue

            report = FileReport(path.name, error=ErrorHandler.handle_unsupported_format_error(path.name))
            self.notifications.show_error(report.error['error']['message'], report.error['error']['details'])
            self.reports.append(report)

        if accepted:
            self.queue.add_files(accepted)
            self.queue.run()
        return self.reports[start:]

    def process_file(self, path: Path) -> FileReport:
        report = FileReport(path.name)
        added = []
        try:
            for email in self.parser.parse_file(path):
                if self.timeline.add_email(email):
                    added.append(email)
                else:
                    report.duplicates += 1
        except FileTooLargeError as e:
            report.error = ErrorHandler.handle_file_size_error(path.name, e.file_size, e.max_size)
        except UnsupportedFileError:
            report.error = ErrorHandler.handle_unsupported_format_error(path.name)
        except ChronologyError as e:
            report.error = ErrorHandler.handle_parsing_error(path.name, str(e))
        except Exception as e:
            report.error = ErrorHandler.handle_unexpected_error(path.name, str(e))

        if report.error:
            # A file either loads completely or not at all
            self.timeline.discard(added)
            report.duplicates = 0
            self.notifications.show_error(report.error['error']['message'], report.error['error']['details'])
            self.reports.append(report)
            return report

        report.added = len(added)

        if report.duplicates:
            duplicate = ErrorHandler.handle_duplicate_error(path.name, report.duplicates)
            self.notifications.show_error(duplicate['error']['message'], duplicate['error']['details'])

        self.logger.info(f"{path.name}: {report.added} added, {report.duplicates} duplicate(s)")
        self.reports.append(report)
        return report

    def clear_all(self) -> int:
        """Empty the timeline, the queue and the notices; returns how many emails were dropped."""
        count = self.timeline.count
        self.timeline.clear()
        self.queue.clear()
        self.notifications.close_all()
        self.reports.clear()
        return count

    def export(self) -> Dict[str, Any]:
        return {
            'email_count': self.timeline.count,
            'groups': [
                {
                    'source_label': group.source_label,
                    'emails': [email.to_dict() for email in group.emails],
                }
                for group in self.timeline.group_by_source()
            ],
            'files': [
                {
                    'filename': report.filename,
                    'success': report.success,
                    'added': report.added,
                    'duplicates': report.duplicates,
                    'error': report.error,
                }
                for report in self.reports
            ],
        }
