# ============================================================================
# email_chronology/formatters.py - Address formatting and timeline rendering
# ============================================================================

from typing import Iterable, List, Optional

from .dates import format_display_date
from .models import ExtractedEmail, Recipient

RECIPIENT_KINDS = {'to': 1, 'cc': 2}


def format_address(name: Optional[str], email: Optional[str]) -> str:
    if not name and not email:
        return ''
    if not email:
        return name
    if not name:
        return email
    return f"{name} <{email}>"


def format_recipients(recipients: Optional[List[Recipient]], kind: str) -> str:
    """Comma-separated recipients of one kind; anything but "cc" means To."""
    if not recipients:
        return ''

    wanted = RECIPIENT_KINDS['cc'] if kind.lower() == 'cc' else RECIPIENT_KINDS['to']
    formatted = [
        format_address(r.name, r.email)
        for r in recipients
        if r.kind == wanted
    ]
    return ', '.join(f for f in formatted if f)


def render_email(email: ExtractedEmail) -> List[str]:
    lines = []
    for label, value in (('From:', email.sender), ('To:', email.to), ('Cc:', email.cc)):
        if value:
            lines.append(f"{label:<6}{value}")
    if email.date:
        lines.append(f"{'Date:':<6}{format_display_date(email.date)}")

    lines.append(email.subject or '(No Subject)')

    if email.body:
        lines.append('')
        lines.extend(email.body.split('\n'))

    if email.attachments:
        lines.append('')
        lines.append('Attachments:')
        lines.extend(f"  - {name}" for name in email.attachments)
    return lines


def render_timeline(groups: Iterable) -> str:
    """Plain-text view of a grouped timeline, one block per source file."""
    blocks = []
    for group in groups:
        lines = [f"=== {group.source_label} ==="]
        for index, email in enumerate(group.emails):
            if index:
                lines.append('-' * 40)
            lines.extend(render_email(email))
        blocks.append('\n'.join(lines))
    return '\n\n'.join(blocks)
