# ============================================================================
# email_chronology/notifications.py - User-facing notices
# ============================================================================

import logging
from dataclasses import dataclass
from typing import List

ERROR = 'error'


@dataclass(frozen=True)
class Notification:
    level: str
    title: str
    message: str


class NotificationCenter:
    """Collects notices for whoever presents them. Pass it around; there is no global one."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._notifications: List[Notification] = []

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    def show_error(self, title: str, message: str) -> Notification:
        self.logger.warning(f"{title}: {message}")
        return self._add(Notification(ERROR, title, message))

    def close_all(self) -> None:
        self._notifications.clear()

    def _add(self, notification: Notification) -> Notification:
        self._notifications.append(notification)
        return notification
