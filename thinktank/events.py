"""Single-subscriber event channels used by the debate engine."""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class EventChannel:
    """One notification slot. Subscribing again replaces the previous callback.

    Callbacks run synchronously inside emit(), at the point of emission.
    An exception raised by the callback is logged and does not reach the
    emitter, so a broken subscriber never interrupts a turn or gets blamed
    on the model that is streaming.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._callback: Callable[..., Any] | None = None

    @property
    def subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: Callable[..., Any] | None) -> None:
        self._callback = callback

    def emit(self, *args: Any) -> None:
        if self._callback is None:
            return
        try:
            self._callback(*args)
        except Exception:
            logger.exception("Subscriber to %s failed", self.name)
