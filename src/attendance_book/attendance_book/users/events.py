from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import AuthEventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthEvent:
    kind: AuthEventKind
    user_id: Optional[int]
    at: datetime = field(default_factory=now_local)


AuthListener = Callable[[AuthEvent], None]


class AuthEventBus:
    """In-process auth-change subscription (sign in/out, profile updates)."""

    def __init__(self):
        self._listeners: list[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register `listener`; returns the function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # A broken listener must not undo a completed sign-in/out.
                logger.exception("Auth listener failed for %s", event.kind.value)
