# ============================================================================
# email_chronology/interfaces.py
# ============================================================================

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .models import DecodedMessage


class MessageFileReader(ABC):
    """Interface for format-specific message file readers."""

    @abstractmethod
    def can_read(self, data: bytes, filename: Optional[str] = None) -> Tuple[bool, float]:
        """Check if this reader can handle the data. Returns (can_read, confidence)."""
        pass

    @abstractmethod
    def read(self, data: bytes, filename: Optional[str] = None) -> DecodedMessage:
        """Decode the data into a DecodedMessage. Raises MessageParseError on failure."""
        pass
