"""Exceptions and standardized error reports for Email Chronology."""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional


class ChronologyError(Exception):
    """Base class for failures outside the chain-extraction core."""


class UnsupportedFileError(ChronologyError):
    """The file is not a supported message file."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f'"{filename}" is not a supported message file')


class FileTooLargeError(ChronologyError):
    """The file exceeds the configured size limit."""

    def __init__(self, filename: str, file_size: int, max_size: int):
        self.filename = filename
        self.file_size = file_size
        self.max_size = max_size
        super().__init__(f"{filename} is {file_size} bytes, limit is {max_size} bytes")


class MessageParseError(ChronologyError):
    """A message file could not be decoded."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Failed to parse {filename}: {reason}")


class ErrorHandler:
    """Builds standardized error reports for per-file failures."""

    @staticmethod
    def handle_unsupported_format_error(filename: str) -> Dict[str, Any]:
        return ErrorHandler._build_error_report(
            code="UNSUPPORTED_FORMAT",
            message="Invalid File Type",
            details=f'"{filename}" is not a .msg file and will be ignored.',
            source=filename,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_file_size_error(filename: str, file_size: int, max_size: int) -> Dict[str, Any]:
        return ErrorHandler._build_error_report(
            code="FILE_TOO_LARGE",
            message="Message file exceeds size limit",
            details=f"File size: {file_size} bytes, Maximum allowed: {max_size} bytes",
            source=filename,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_parsing_error(filename: str, error_message: str) -> Dict[str, Any]:
        return ErrorHandler._build_error_report(
            code="PARSING_ERROR",
            message="Parsing Error",
            details=error_message or f'Failed to parse "{filename}".',
            source=filename,
            log_level=logging.ERROR
        )

    @staticmethod
    def handle_duplicate_error(filename: str, duplicate_count: int) -> Dict[str, Any]:
        email_word = "email" if duplicate_count == 1 else "emails"
        verb = "has" if duplicate_count == 1 else "have"
        return ErrorHandler._build_error_report(
            code="DUPLICATE_EMAIL",
            message="Duplicate Email",
            details=f'"{filename}" contained {duplicate_count} {email_word} that {verb} already been added.',
            source=filename,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_unexpected_error(filename: str, error_message: str) -> Dict[str, Any]:
        return ErrorHandler._build_error_report(
            code="INTERNAL_ERROR",
            message="An unexpected error occurred during processing",
            details=f"Internal error: {error_message}",
            source=filename,
            log_level=logging.ERROR
        )

    @staticmethod
    def _build_error_report(
        code: str,
        message: str,
        details: str,
        source: Optional[str],
        log_level: int = logging.ERROR
    ) -> Dict[str, Any]:
        """
        Build a standardized error report.

        Args:
            code: Error code for categorization
            message: Short title shown to the user
            details: Detailed error information
            source: File the error relates to
            log_level: Logging level for this error

        Returns:
            Standardized error report dictionary
        """
        logging.log(log_level, f"{source or 'input'} error [{code}]: {message} - {details}")

        return {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "error": {
                "code": code,
                "message": message,
                "details": details
            },
            "troubleshooting": ErrorHandler._get_troubleshooting_info(code)
        }

    @staticmethod
    def _get_troubleshooting_info(error_code: str) -> Dict[str, Any]:
        troubleshooting_guide = {
            "UNSUPPORTED_FORMAT": {
                "common_causes": [
                    "File is not an Outlook message",
                    "Incorrect file extension"
                ],
                "solutions": [
                    "Save the message from Outlook as a .msg file",
                    "Check file extension matches content"
                ]
            },
            "FILE_TOO_LARGE": {
                "common_causes": [
                    "Message file exceeds size limit",
                    "Large attachments in message"
                ],
                "solutions": [
                    "Raise EC_MAX_FILE_SIZE_MB",
                    "Remove large attachments before processing"
                ]
            },
            "PARSING_ERROR": {
                "common_causes": [
                    "Corrupted message file",
                    "File saved by an unsupported client"
                ],
                "solutions": [
                    "Verify the file opens in Outlook",
                    "Re-export the message and try again"
                ]
            },
            "DUPLICATE_EMAIL": {
                "common_causes": [
                    "The same message was loaded twice",
                    "A chain quotes a message that was also loaded on its own"
                ],
                "solutions": [
                    "No action needed, duplicates are skipped"
                ]
            },
            "INTERNAL_ERROR": {
                "common_causes": [
                    "Unexpected system error",
                    "Code bug or edge case"
                ],
                "solutions": [
                    "Run again with --log-level DEBUG",
                    "Report the file that triggers the error"
                ]
            }
        }

        return troubleshooting_guide.get(error_code, {
            "common_causes": ["Unknown error"],
            "solutions": ["Contact support for assistance"]
        })
