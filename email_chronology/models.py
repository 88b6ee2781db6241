# ============================================================================
# email_chronology/models.py - Records passed between components
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RawMessage:
    """A message body handed to the chain parser, with the label of its file."""
    body: str
    source_label: str = ""


@dataclass
class ExtractedEmail:
    sender: str = ""
    to: str = ""
    cc: str = ""
    date: Optional[datetime] = None
    subject: str = ""
    body: str = ""
    source_label: str = ""
    attachments: List[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        """A record needs someone to talk about and something to place it by."""
        has_party = bool(self.sender or self.to)
        has_anchor = self.date is not None or bool(self.subject)
        return has_party and has_anchor

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.sender,
            "to": self.to,
            "cc": self.cc,
            "date": self.date.isoformat() if self.date else None,
            "subject": self.subject,
            "body": self.body,
            "source_label": self.source_label,
            "attachments": list(self.attachments),
        }


@dataclass
class Recipient:
    name: str = ""
    email: str = ""
    kind: int = 1  # 1 = To, 2 = Cc, 3 = Bcc


@dataclass
class DecodedMessage:
    """Fields lifted out of a message file before any chain analysis."""
    subject: str = ""
    sender_name: str = ""
    sender_email: str = ""
    recipients: List[Recipient] = field(default_factory=list)
    delivery_time: Any = None
    body: str = ""
    html_body: str = ""
    attachments: List[str] = field(default_factory=list)
