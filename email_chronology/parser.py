# ============================================================================
# email_chronology/parser.py - Message file to email records
# ============================================================================

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .chain_parser import ForwardedChainParser
from .config import config
from .envelope import EnvelopeBuilder
from .errors import FileTooLargeError, MessageParseError, UnsupportedFileError
from .interfaces import MessageFileReader
from .models import ExtractedEmail, RawMessage


class EmailChronologyParser:
    """Turns one message file into the emails it holds.

    A file whose body is a forwarded chain yields every message of the chain,
    in the order they appear in the text; any other file yields one email.
    """

    def __init__(self, readers: Sequence[MessageFileReader], envelope_builder: EnvelopeBuilder,
                 chain_parser: ForwardedChainParser, logger: logging.Logger,
                 max_file_size_mb: Optional[int] = None):
        self.readers = list(readers)
        self.envelope_builder = envelope_builder
        self.chain_parser = chain_parser
        self.logger = logger
        self.max_file_size = (max_file_size_mb or config.MAX_FILE_SIZE_MB) * 1024 * 1024

    def parse_file(self, path: Union[str, Path]) -> List[ExtractedEmail]:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise MessageParseError(path.name, str(e)) from e
        return self.parse(data, path.name)

    def parse(self, data: bytes, filename: str) -> List[ExtractedEmail]:
        if len(data) > self.max_file_size:
            raise FileTooLargeError(filename, len(data), self.max_file_size)

        reader = self._select_reader(data, filename)
        decoded = reader.read(data, filename)
        top_level = self.envelope_builder.build(decoded, filename)

        chain = self.chain_parser.parse(RawMessage(body=top_level.body, source_label=filename))
        if chain:
            self.logger.info(f"{filename}: forwarded chain of {len(chain)} emails")
            return chain

        self.logger.info(f"{filename}: single email")
        return [top_level]

    def _select_reader(self, data: bytes, filename: str) -> MessageFileReader:
        best_reader = None
        best_confidence = 0.0
        for reader in self.readers:
            can_read, confidence = reader.can_read(data, filename)
            if can_read and confidence > best_confidence:
                best_reader, best_confidence = reader, confidence

        if best_reader is None:
            raise UnsupportedFileError(filename)

        self.logger.debug(f"Using {type(best_reader).__name__} for {filename} (confidence {best_confidence})")
        return best_reader
