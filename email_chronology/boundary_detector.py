# ============================================================================
# email_chronology/boundary_detector.py - Embedded message boundary detection
# ============================================================================

import logging
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from .config import config

HEADER_START = 'header_start'
QUOTE_INTRODUCER = 'quote_introducer'
SEPARATOR = 'separator'

# Boundary placement relative to the matching line
LINE_START = 'line_start'
AFTER_LINE = 'after_line'

QUOTE_INTRODUCER_PATTERN = re.compile(r'^On\s+.+\s+wrote:\s*$', re.IGNORECASE)
FOLLOWING_HEADER_PATTERN = re.compile(r'^(To|Date|Sent|Cc|Subject):', re.IGNORECASE)


def separator_pattern(min_length: int) -> re.Pattern:
    return re.compile(r'^[_-]{%d,}$' % min_length)


@dataclass(frozen=True)
class BoundaryRule:
    """One family of lines that opens an embedded message."""
    kind: str
    pattern: re.Pattern
    placement: str = LINE_START
    needs_header_lookahead: bool = False


class Boundary(NamedTuple):
    offset: int
    kind: str


def default_rules(separator_min_length: Optional[int] = None) -> List[BoundaryRule]:
    min_length = separator_min_length or config.SEPARATOR_MIN_LENGTH
    return [
        # "From: Jane <jane@x.com>", only when more headers follow
        BoundaryRule(HEADER_START, re.compile(r'^From:\s*\S', re.IGNORECASE),
                     needs_header_lookahead=True),
        # "On Jul 11, 2025, at 11:22 AM, Jane <jane@x.com> wrote:"
        BoundaryRule(QUOTE_INTRODUCER, QUOTE_INTRODUCER_PATTERN),
        # "________________________________" belongs to the message above it
        BoundaryRule(SEPARATOR, separator_pattern(min_length), placement=AFTER_LINE),
    ]


class BoundaryDetector:
    """Finds the character offsets where quoted or forwarded messages begin."""

    def __init__(self, logger: logging.Logger, rules: Optional[List[BoundaryRule]] = None,
                 lookahead_lines: Optional[int] = None):
        self.logger = logger
        self.rules = rules if rules is not None else default_rules()
        self.lookahead_lines = lookahead_lines or config.HEADER_LOOKAHEAD_LINES

    def detect(self, body: str) -> List[int]:
        """Offsets in scan order. Duplicates are kept; empty sections are the caller's to skip."""
        return [boundary.offset for boundary in self.scan(body)]

    def scan(self, body: str) -> List[Boundary]:
        boundaries: List[Boundary] = []
        lines = body.split('\n')
        position = 0

        for index, line in enumerate(lines):
            trimmed = line.strip()

            for rule in self.rules:
                if not rule.pattern.search(trimmed):
                    continue
                if rule.needs_header_lookahead and boundaries and not self._has_following_headers(lines, index):
                    continue

                if rule.placement == AFTER_LINE:
                    boundaries.append(Boundary(position + len(line) + 1, rule.kind))
                else:
                    boundaries.append(Boundary(position, rule.kind))

            position += len(line) + 1

        if boundaries:
            self.logger.debug(
                f"Found {len(boundaries)} boundaries: "
                + ", ".join(f"{b.kind}@{b.offset}" for b in boundaries)
            )
        return boundaries

    def _has_following_headers(self, lines: List[str], index: int) -> bool:
        window = lines[index + 1:index + 1 + self.lookahead_lines]
        return any(FOLLOWING_HEADER_PATTERN.match(line.strip()) for line in window)
