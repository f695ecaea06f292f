"""
Status notifier - one transient banner message at a time
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from campus_registry.models.view import StatusKind, StatusMessage

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 3.0


class StatusNotifier:
    """
    Holds the currently visible status message

    A new message replaces the current one immediately. Every message expires
    ``timeout`` seconds after it was shown, read or not. Expiry is evaluated
    against the injected monotonic ``clock`` whenever the message is read.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._message: Optional[StatusMessage] = None
        self._shown_at: float = 0.0

    def notify(self, kind: StatusKind, text: str) -> StatusMessage:
        self._message = StatusMessage(
            kind=kind,
            text=text,
            shown_at=datetime.now(timezone.utc),
            expires_in=self.timeout
        )
        self._shown_at = self._clock()
        logger.debug(f"Status [{kind.value}]: {text}")
        return self._message

    def success(self, text: str) -> StatusMessage:
        return self.notify(StatusKind.SUCCESS, text)

    def error(self, text: str) -> StatusMessage:
        return self.notify(StatusKind.ERROR, text)

    def info(self, text: str) -> StatusMessage:
        return self.notify(StatusKind.INFO, text)

    def dismiss(self) -> None:
        """Close affordance; the message would expire on its own anyway"""
        self._message = None

    @property
    def current(self) -> Optional[StatusMessage]:
        """The visible message, or None once it has expired"""
        if self._message is None:
            return None

        elapsed = self._clock() - self._shown_at
        if elapsed >= self.timeout:
            self._message = None
            return None

        return self._message.model_copy(update={"expires_in": round(self.timeout - elapsed, 3)})
