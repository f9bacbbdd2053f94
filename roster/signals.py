from __future__ import annotations

from typing import Any, Callable, Tuple

import structlog

logger = structlog.get_logger(__name__)

Handler = Callable[..., Any]


class Signal:
    """Listeners notified of list-screen state changes, in connection order.

    The handler tuple is replaced rather than mutated, so an emit that is
    already running keeps the listeners it started with. A failing handler
    is logged and the remaining handlers still run.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._handlers: Tuple[Handler, ...] = ()

    def connect(self, handler: Handler) -> Handler:
        if handler not in self._handlers:
            self._handlers = self._handlers + (handler,)
        return handler

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in self._handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                logger.error("signal_handler_failed", signal=self.name, handler=repr(handler), error=str(exc))
