# ============================================================================
# email_chronology/processing_queue.py - Sequential file processing
# ============================================================================

import logging
from collections import deque
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional


class ProcessingQueue:
    """Feeds queued files to a processor one at a time, in arrival order."""

    def __init__(self, processor: Callable[[Path], Any], logger: logging.Logger):
        self.processor = processor
        self.logger = logger
        self._queue = deque()
        self.current_file: Optional[Path] = None
        self.is_processing = False

    def add_files(self, files: Iterable[Path]) -> None:
        self._queue.extend(Path(f) for f in files)
        self.logger.debug(f"Queue length: {len(self._queue)}")

    def process_next(self) -> bool:
        """Process one file; returns False when the queue was empty."""
        if not self._queue:
            self.is_processing = False
            self.current_file = None
            return False

        self.is_processing = True
        self.current_file = self._queue.popleft()
        try:
            self.processor(self.current_file)
        except Exception as e:
            # One bad file must not stall the files behind it
            self.logger.error(f"Error processing file {self.current_file}: {e}")
        return True

    def run(self) -> None:
        while self.process_next():
            pass

    def clear(self) -> None:
        self._queue.clear()

    def status(self) -> Dict[str, Any]:
        return {
            'pending': len(self._queue),
            'current': self.current_file.name if self.current_file else None,
            'next': self._queue[0].name if self._queue else None,
            'is_processing': self.is_processing,
        }
