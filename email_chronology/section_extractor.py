# ============================================================================
# email_chronology/section_extractor.py - Quoted header block parsing
# ============================================================================

import logging
import re
from typing import List, Optional

from .boundary_detector import QUOTE_INTRODUCER_PATTERN
from .config import config
from .dates import FlexibleDateParser
from .models import ExtractedEmail
from .text_cleaner import clean_header_text

HEADER_LINE = re.compile(r'^(From|To|Cc|Date|Sent|Subject):\s*(.*)', re.IGNORECASE)


class SectionExtractor:
    """Recovers sender, recipients, date, subject and body from one section of a chain."""

    def __init__(self, logger: logging.Logger, date_parser: Optional[FlexibleDateParser] = None,
                 short_value_length: Optional[int] = None,
                 max_subject_length: Optional[int] = None):
        self.logger = logger
        self.date_parser = date_parser or FlexibleDateParser(logger)
        self.short_value_length = short_value_length or config.SHORT_HEADER_VALUE_LENGTH
        self.max_subject_length = max_subject_length or config.MAX_UNLABELED_SUBJECT_LENGTH

    def extract(self, section: str) -> Optional[ExtractedEmail]:
        lines = section.split('\n')
        email = ExtractedEmail()
        found_headers = False
        i = 0

        if lines and QUOTE_INTRODUCER_PATTERN.match(lines[0].strip()):
            i = 1

        while i < len(lines):
            trimmed = lines[i].strip()
            match = HEADER_LINE.match(trimmed)

            if match:
                name = match.group(1).lower()
                value = match.group(2).strip()

                # Some clients wrap the value onto the following lines
                if len(value) < self.short_value_length:
                    value, i = self._collect_continuation(lines, i + 1, value)

                value = clean_header_text(value)
                if name == 'from':
                    email.sender = value
                    found_headers = True
                elif name == 'to':
                    email.to = value
                elif name == 'cc':
                    email.cc = value
                elif name in ('date', 'sent'):
                    email.date = self.date_parser.parse(value)
                elif name == 'subject':
                    email.subject = value

            elif found_headers and not trimmed:
                i += 1
                break

            elif found_headers:
                if not email.subject and len(trimmed) < self.max_subject_length:
                    email.subject = trimmed
                else:
                    break

            i += 1

        if i < len(lines):
            email.body = '\n'.join(lines[i:]).strip()

        if not email.is_valid():
            self.logger.debug(f"Discarding section without usable headers: {section[:60]!r}")
            return None
        return email

    def _collect_continuation(self, lines: List[str], start: int, value: str):
        """Join lines onto a short header value; returns the value and the last consumed index."""
        i = start
        while i < len(lines):
            next_line = lines[i].strip()
            if not next_line or HEADER_LINE.match(next_line):
                break
            value = f"{value} {next_line}" if value else next_line
            i += 1
        return value, i - 1
