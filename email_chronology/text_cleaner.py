# ============================================================================
# email_chronology/text_cleaner.py - Header value cleanup
# ============================================================================

import re

MAILTO_LINK = re.compile(r'<mailto:[^>]+>')
REPEATED_ADDRESS = re.compile(r'(\S+@\S+)\s+<\1>')
WHITESPACE_RUN = re.compile(r'\s+')


def clean_header_text(text: str) -> str:
    """Strip mail-client decorations from a quoted header value.

    "Jane Doe <mailto:jane@x.com>" -> "Jane Doe"
    "jane@x.com <jane@x.com>"      -> "jane@x.com"

    Passes repeat until nothing changes, so cleaning a cleaned value is a no-op.
    """
    if not text:
        return ""

    cleaned = _clean_once(text)
    while cleaned != text:
        text = cleaned
        cleaned = _clean_once(text)
    return cleaned


def _clean_once(text: str) -> str:
    text = MAILTO_LINK.sub('', text)
    text = REPEATED_ADDRESS.sub(r'\1', text)
    return WHITESPACE_RUN.sub(' ', text).strip()
