# ============================================================================
# email_chronology/chain_parser.py - Forwarded chain extraction
# ============================================================================

import logging
from typing import List, Optional

from .boundary_detector import SEPARATOR, BoundaryDetector
from .config import config
from .models import ExtractedEmail, RawMessage
from .section_extractor import SectionExtractor


class ForwardedChainParser:
    """Splits a message body into the messages quoted or forwarded inside it.

    Returns nothing unless at least ``min_chain_length`` sections yield a valid
    record; the caller then keeps the message as a single email.
    """

    def __init__(self, logger: logging.Logger,
                 boundary_detector: Optional[BoundaryDetector] = None,
                 section_extractor: Optional[SectionExtractor] = None,
                 min_chain_length: Optional[int] = None):
        self.logger = logger
        self.boundary_detector = boundary_detector or BoundaryDetector(logger)
        self.section_extractor = section_extractor or SectionExtractor(logger)
        self.min_chain_length = min_chain_length or config.MIN_CHAIN_LENGTH
        # Separators are whatever the detector splits on
        self._separators = [rule.pattern for rule in self.boundary_detector.rules if rule.kind == SEPARATOR]

    def parse(self, message: RawMessage) -> List[ExtractedEmail]:
        body = message.body
        if not isinstance(body, str):
            raise TypeError(f"Message body must be a string, got {type(body).__name__}")
        if not body:
            return []

        boundaries = self.boundary_detector.detect(body)
        if not boundaries:
            return []

        emails = []
        ends = boundaries[1:] + [len(body)]
        for start, end in zip(boundaries, ends):
            section = self._drop_trailing_separator(body[start:end]).strip()
            if not section:
                continue

            email = self.section_extractor.extract(section)
            if email:
                email.source_label = message.source_label
                emails.append(email)

        if len(emails) < self.min_chain_length:
            self.logger.debug(
                f"{message.source_label or 'message'}: {len(boundaries)} boundaries "
                f"but {len(emails)} valid section(s), not a chain"
            )
            return []

        self.logger.info(f"Extracted {len(emails)} emails from chain in {message.source_label or 'message'}")
        return emails

    def _drop_trailing_separator(self, section: str) -> str:
        """The separator closing a section is consumed rather than kept in its body."""
        lines = section.rstrip().split('\n')
        last = lines[-1].strip()
        if len(lines) > 1 and any(pattern.search(last) for pattern in self._separators):
            return '\n'.join(lines[:-1])
        return section


def parse_forwarded_chain(message: RawMessage, source_label: Optional[str] = None) -> List[ExtractedEmail]:
    """Parse a chain with default components; ``source_label`` overrides the message's label."""
    if source_label is not None:
        message = RawMessage(body=message.body, source_label=source_label)
    return ForwardedChainParser(logging.getLogger(__name__)).parse(message)
