# ============================================================================
# email_chronology/timeline.py - Deduplicated chronological email collection
# ============================================================================

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .config import config
from .models import ExtractedEmail

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
UNKNOWN_SOURCE = 'Unknown'


@dataclass
class SourceGroup:
    source_label: str
    emails: List[ExtractedEmail] = field(default_factory=list)


def email_identity(email: ExtractedEmail, body_prefix_chars: Optional[int] = None) -> str:
    """Date, subject, sender and the start of the body identify an email across files."""
    prefix = body_prefix_chars or config.IDENTITY_BODY_PREFIX_CHARS
    parts = [
        email.date.isoformat() if email.date else '',
        email.subject or '',
        email.sender or '',
        (email.body or '')[:prefix],
    ]
    return '|||'.join(parts)


def _sort_key(email: ExtractedEmail) -> datetime:
    if email.date is None:
        return EPOCH
    if email.date.tzinfo is None:
        return email.date.replace(tzinfo=timezone.utc)
    return email.date


class EmailTimeline:
    """Emails from every loaded file, without duplicates, earliest first."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._emails: Dict[str, ExtractedEmail] = {}

    @property
    def count(self) -> int:
        return len(self._emails)

    def add_email(self, email: ExtractedEmail) -> bool:
        """Returns False when an identical email is already present."""
        identity = email_identity(email)
        if identity in self._emails:
            self.logger.debug(f"Skipping duplicate email: {email.subject!r} from {email.sender!r}")
            return False

        self._emails[identity] = email
        return True

    def discard(self, emails: List[ExtractedEmail]) -> None:
        """Remove emails previously added; others sharing their identity are left alone."""
        for email in emails:
            identity = email_identity(email)
            if self._emails.get(identity) is email:
                del self._emails[identity]

    def clear(self) -> None:
        self._emails.clear()

    def sorted_emails(self) -> List[ExtractedEmail]:
        # Undated emails sort as the epoch; ties keep insertion order
        return sorted(self._emails.values(), key=_sort_key)

    def group_by_source(self) -> List[SourceGroup]:
        groups: Dict[str, SourceGroup] = {}
        for email in self.sorted_emails():
            label = email.source_label or UNKNOWN_SOURCE
            if label not in groups:
                groups[label] = SourceGroup(label)
            groups[label].emails.append(email)
        return list(groups.values())
