# ============================================================================
# email_chronology/parsers/msg_parser.py
# ============================================================================

import email.utils
import logging
import os
import tempfile
from typing import Any, List, Optional, Tuple

import extract_msg

from ..errors import MessageParseError
from ..interfaces import MessageFileReader
from ..models import DecodedMessage, Recipient

OLE_MAGIC = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'


class MsgFileReader(MessageFileReader):
    """Reader for Microsoft Outlook MSG files."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def can_read(self, data: bytes, filename: Optional[str] = None) -> Tuple[bool, float]:
        """Check if this is a MSG file."""
        # Check magic bytes for OLE/MSG format
        if data.startswith(OLE_MAGIC):
            return True, 0.9

        # Check filename
        if filename and filename.lower().endswith('.msg'):
            return True, 0.7

        return False, 0.0

    def read(self, data: bytes, filename: Optional[str] = None) -> DecodedMessage:
        """Decode MSG file data using extract_msg."""
        name = filename or 'message.msg'
        tmp_file_path = None
        msg = None
        try:
            self.logger.info(f"Reading MSG file {name}")

            # extract_msg works on a path
            with tempfile.NamedTemporaryFile(suffix='.msg', delete=False) as tmp_file:
                tmp_file.write(data)
                tmp_file.flush()
                tmp_file_path = tmp_file.name

            msg = extract_msg.Message(tmp_file_path)
            return self._convert_msg(msg)

        except MessageParseError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to read MSG file {name}: {e}")
            raise MessageParseError(name, str(e)) from e
        finally:
            if msg is not None and hasattr(msg, 'close'):
                msg.close()
            if tmp_file_path and os.path.exists(tmp_file_path):
                try:
                    os.unlink(tmp_file_path)
                    self.logger.debug(f"Cleaned up temporary file: {tmp_file_path}")
                except OSError as cleanup_error:
                    self.logger.warning(f"Could not clean up temporary file {tmp_file_path}: {cleanup_error}")

    def _convert_msg(self, msg: Any) -> DecodedMessage:
        """Lift the fields the chronology needs off an extract_msg message."""
        sender_name, sender_email = self._split_sender(msg)

        decoded = DecodedMessage(
            subject=self._get_attr(msg, 'subject') or '',
            sender_name=sender_name,
            sender_email=sender_email,
            recipients=self._extract_recipients(msg),
            delivery_time=self._get_attr(msg, 'receivedTime') or self._get_attr(msg, 'date'),
            body=self._decode_text(self._get_attr(msg, 'body')),
            html_body=self._decode_text(self._get_attr(msg, 'htmlBody')),
            attachments=self._extract_attachments(msg),
        )
        self.logger.debug(
            f"Decoded MSG: subject={decoded.subject!r}, {len(decoded.recipients)} recipients, "
            f"{len(decoded.attachments)} attachments"
        )
        return decoded

    def _get_attr(self, msg: Any, attr: str) -> Any:
        try:
            return getattr(msg, attr, None)
        except Exception as e:
            # extract_msg properties decode lazily and can fail on damaged streams
            self.logger.debug(f"Error getting {attr}: {e}")
            return None

    def _split_sender(self, msg: Any) -> Tuple[str, str]:
        name = self._get_attr(msg, 'senderName') or ''
        address = self._get_attr(msg, 'senderEmail') or ''
        if name or address:
            return str(name), str(address)

        sender = self._get_attr(msg, 'sender') or ''
        name, address = email.utils.parseaddr(str(sender))
        if '@' not in address:
            # Exchange senders can be a bare display name
            return str(sender).strip(), ''
        return name, address

    def _extract_recipients(self, msg: Any) -> List[Recipient]:
        recipients = []
        for recipient in self._get_attr(msg, 'recipients') or []:
            kind = getattr(recipient, 'type', None)
            try:
                kind = int(kind) if kind is not None else 1
            except (TypeError, ValueError):
                kind = 1
            recipients.append(Recipient(
                name=getattr(recipient, 'name', '') or '',
                email=getattr(recipient, 'email', '') or '',
                kind=kind,
            ))
        return recipients

    def _extract_attachments(self, msg: Any) -> List[str]:
        names = []
        for attachment in self._get_attr(msg, 'attachments') or []:
            name = (
                getattr(attachment, 'longFilename', None)
                or getattr(attachment, 'shortFilename', None)
                or getattr(attachment, 'name', None)
            )
            if name:
                names.append(name)
        return names

    def _decode_text(self, value: Any) -> str:
        if not value:
            return ''
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            for encoding in ['utf-8', 'windows-1252']:
                try:
                    return value.decode(encoding)
                except UnicodeDecodeError:
                    continue
            return value.decode('latin-1')
        return str(value)
