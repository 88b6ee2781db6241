"""
Centralized configuration management for Email Chronology
All configurable values consolidated in one place for easy management
"""

import os
from typing import Dict, Any


class ChronologyConfig:
    """Configuration management with environment variable override support"""

    def __init__(self):
        # Boundary Detection
        self.HEADER_LOOKAHEAD_LINES = int(os.getenv('EC_HEADER_LOOKAHEAD_LINES', 5))
        self.SEPARATOR_MIN_LENGTH = int(os.getenv('EC_SEPARATOR_MIN_LENGTH', 20))

        # Section Extraction
        self.SHORT_HEADER_VALUE_LENGTH = int(os.getenv('EC_SHORT_HEADER_VALUE_LENGTH', 3))
        self.MAX_UNLABELED_SUBJECT_LENGTH = int(os.getenv('EC_MAX_UNLABELED_SUBJECT_LENGTH', 200))

        # Chain Detection
        self.MIN_CHAIN_LENGTH = int(os.getenv('EC_MIN_CHAIN_LENGTH', 2))

        # Timeline
        self.IDENTITY_BODY_PREFIX_CHARS = int(os.getenv('EC_IDENTITY_BODY_PREFIX_CHARS', 100))

        # Dates
        self.DEFAULT_TIMEZONE = os.getenv('EC_DEFAULT_TIMEZONE', 'UTC')

        # File Handling
        self.MAX_FILE_SIZE_MB = int(os.getenv('EC_MAX_FILE_SIZE_MB', 50))
        self.ALLOWED_EXTENSIONS = ['.msg']

        # Logging
        self.DEFAULT_LOG_LEVEL = os.getenv('EC_DEFAULT_LOG_LEVEL', 'INFO')
        self.VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    def get_config_dict(self) -> Dict[str, Any]:
        """Get all configuration values as a dictionary"""
        return {
            # Boundary Detection
            'header_lookahead_lines': self.HEADER_LOOKAHEAD_LINES,
            'separator_min_length': self.SEPARATOR_MIN_LENGTH,

            # Section Extraction
            'short_header_value_length': self.SHORT_HEADER_VALUE_LENGTH,
            'max_unlabeled_subject_length': self.MAX_UNLABELED_SUBJECT_LENGTH,

            # Chain Detection
            'min_chain_length': self.MIN_CHAIN_LENGTH,

            # Timeline
            'identity_body_prefix_chars': self.IDENTITY_BODY_PREFIX_CHARS,

            # Dates
            'default_timezone': self.DEFAULT_TIMEZONE,

            # File Handling
            'max_file_size_mb': self.MAX_FILE_SIZE_MB,
            'allowed_extensions': self.ALLOWED_EXTENSIONS,

            # Logging
            'default_log_level': self.DEFAULT_LOG_LEVEL,
            'valid_log_levels': self.VALID_LOG_LEVELS,
        }


# Create a singleton instance
config = ChronologyConfig()
