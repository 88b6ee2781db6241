# ============================================================================
# email_chronology/converters.py
# ============================================================================

import logging
import re

import html2text

EXCESS_BLANK_LINES = re.compile(r'\n\s*\n\s*\n')


class HtmlToTextConverter:
    """Converts HTML bodies to plain text so quoted headers sit on their own lines."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def convert(self, html_content: str) -> str:
        """Convert HTML content to plain text."""
        if not html_content:
            return ""

        self.logger.debug(f"Converting HTML to text, input length: {len(html_content)}")

        h = html2text.HTML2Text()
        h.ignore_links = True
        h.ignore_images = True
        # Outlook bolds "From:"/"Sent:" labels; markdown markers would hide them
        h.ignore_emphasis = True
        h.body_width = 0
        h.unicode_snob = True
        text = h.handle(html_content)

        text = EXCESS_BLANK_LINES.sub('\n\n', text)
        return text.strip()
