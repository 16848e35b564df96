import asyncio
from typing import Any, Callable, Optional

from product_search.config import DEBOUNCE_SECONDS
from product_search.logging_utils import get_logger

logger = get_logger("debounce")


class Debouncer:
    """
    Run a callback once input has been quiet for ``delay`` seconds.

    Each ``schedule`` cancels the pending timer and arms a new one. Timers also
    carry a generation number, so a callback that was already queued by the
    loop when it got superseded still does nothing.

    Without an event loop (a synchronous host) there is nothing to time
    against, so the callback runs straight away.
    """

    def __init__(self, delay: float = DEBOUNCE_SECONDS, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.delay = delay
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _resolve_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def schedule(self, callback: Callable[..., Any], *args: Any, delay: Optional[float] = None) -> None:
        self.cancel()
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("No event loop, running callback immediately")
            callback(*args)
            return
        generation = self._generation
        wait = self.delay if delay is None else delay
        self._handle = loop.call_later(wait, self._fire, generation, callback, args)

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int, callback: Callable[..., Any], args: tuple) -> None:
        if generation != self._generation:
            return
        self._handle = None
        callback(*args)
