"""
Logging Notice Adapter - Sends user notices to the log.

Default NoticePort for headless hosts. Also keeps the last notices so
callers (and tests) can inspect what would have been shown.
"""

import logging
from typing import List

from mro_auth.ports.ui_port import NoticePort, Notice

logger = logging.getLogger(__name__)


class LoggingNoticeAdapter(NoticePort):
    """Log notices at WARNING and remember them."""

    def __init__(self):
        self.notices: List[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)
        logger.warning("[%s] %s", notice.kind.value, notice.message)
