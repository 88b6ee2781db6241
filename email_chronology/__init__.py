# ============================================================================
# email_chronology/__init__.py - Factory and DI setup
# ============================================================================

import logging
import sys

from .app import EmailChronologyApp, FileReport
from .boundary_detector import BoundaryDetector
from .chain_parser import ForwardedChainParser, parse_forwarded_chain
from .config import config
from .converters import HtmlToTextConverter
from .dates import FlexibleDateParser
from .envelope import EnvelopeBuilder
from .models import ExtractedEmail, RawMessage
from .notifications import NotificationCenter
from .parser import EmailChronologyParser
from .parsers.msg_parser import MsgFileReader
from .section_extractor import SectionExtractor
from .text_cleaner import clean_header_text
from .timeline import EmailTimeline


def create_chain_parser(logger: logging.Logger) -> ForwardedChainParser:
    """Chain parser with one date parser shared by its components."""
    date_parser = FlexibleDateParser(logger)
    return ForwardedChainParser(
        logger,
        boundary_detector=BoundaryDetector(logger),
        section_extractor=SectionExtractor(logger, date_parser),
    )


def create_chronology_app(log_level: int = logging.INFO) -> EmailChronologyApp:
    """Factory function to create a fully configured EmailChronologyApp."""
    # Setup logging
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger(__name__)

    # Create dependencies
    html_converter = HtmlToTextConverter(logger)
    envelope_builder = EnvelopeBuilder(logger, html_converter)
    chain_parser = create_chain_parser(logger)

    readers = [
        MsgFileReader(logger),
    ]

    logger.debug(f"Configuration: {config.get_config_dict()}")
    parser = EmailChronologyParser(readers, envelope_builder, chain_parser, logger)
    return EmailChronologyApp(parser, EmailTimeline(logger), NotificationCenter(logger), logger)


__all__ = [
    "BoundaryDetector",
    "EmailChronologyApp",
    "EmailChronologyParser",
    "EmailTimeline",
    "ExtractedEmail",
    "FileReport",
    "FlexibleDateParser",
    "ForwardedChainParser",
    "RawMessage",
    "SectionExtractor",
    "clean_header_text",
    "create_chain_parser",
    "create_chronology_app",
    "parse_forwarded_chain",
]
