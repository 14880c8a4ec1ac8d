"""
Desktop notifier — start/done/error notices via notify-send.

Notifications are best-effort: a missing or failing notifier is
logged and never interrupts a task.
"""

from __future__ import annotations

import logging
import subprocess

from linmaint.core.models.task import Notice

logger = logging.getLogger(__name__)

APP_TITLE = "linmaint"

URGENCY_NORMAL = "normal"
URGENCY_CRITICAL = "critical"


class Notifier:
    """Send desktop notifications and remember what was sent."""

    def __init__(self, tool: str = "notify-send", dry_run: bool = False):
        self.tool = tool
        self.dry_run = dry_run
        self.sent: list[Notice] = []

    def notify(self, message: str, urgency: str = URGENCY_NORMAL, title: str = APP_TITLE) -> Notice:
        notice = Notice(title=title, message=message, urgency=urgency)
        self.sent.append(notice)

        if urgency == URGENCY_CRITICAL:
            logger.error("%s: %s", title, message)
        else:
            logger.warning("%s: %s", title, message)

        if self.dry_run:
            return notice

        try:
            result = subprocess.run(
                [self.tool, "-u", urgency, title, message],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            logger.debug("Notifier %s unavailable: %s", self.tool, e)
            return notice

        if result.returncode != 0:
            logger.debug(
                "Notifier %s exited %d: %s",
                self.tool, result.returncode, result.stderr.strip(),
            )
        return notice

    def error(self, message: str) -> Notice:
        return self.notify(message, urgency=URGENCY_CRITICAL)
