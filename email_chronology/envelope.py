# ============================================================================
# email_chronology/envelope.py - Top-level fields of a message file
# ============================================================================

import logging
from typing import Optional

from .converters import HtmlToTextConverter
from .dates import FlexibleDateParser, coerce_date
from .formatters import format_address, format_recipients
from .models import DecodedMessage, ExtractedEmail


class EnvelopeBuilder:
    """Builds the record a message file stands for when its body is not a chain."""

    def __init__(self, logger: logging.Logger, html_converter: HtmlToTextConverter,
                 date_parser: Optional[FlexibleDateParser] = None):
        self.logger = logger
        self.html_converter = html_converter
        self.date_parser = date_parser or FlexibleDateParser(logger)

    def build(self, decoded: DecodedMessage, source_label: str) -> ExtractedEmail:
        return ExtractedEmail(
            sender=format_address(decoded.sender_name, decoded.sender_email),
            to=format_recipients(decoded.recipients, 'to'),
            cc=format_recipients(decoded.recipients, 'cc'),
            date=coerce_date(decoded.delivery_time, self.date_parser),
            subject=decoded.subject or '',
            body=self.extract_body(decoded),
            source_label=source_label,
            attachments=[name for name in decoded.attachments if name],
        )

    def extract_body(self, decoded: DecodedMessage) -> str:
        """Plain text body when present, otherwise the HTML body converted to text."""
        if decoded.body:
            return decoded.body
        if decoded.html_body:
            self.logger.debug("No plain text body, converting HTML body")
            return self.html_converter.convert(decoded.html_body)
        return ''
