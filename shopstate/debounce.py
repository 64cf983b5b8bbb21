"""Input coalescing for search-as-you-type.

Lives outside the store: a consumer pushes raw keystrokes here and only the
settled value reaches ``store.dispatch``.

Example::

    debouncer = Debouncer(
        lambda text: store.dispatch(SetSearchText(text)),
        delay=settings.search_debounce_seconds,
    )
    debouncer.push("s")
    debouncer.push("sh")
    debouncer.push("shoe")  # only "shoe" is dispatched, once the delay passes
"""

import asyncio
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Calls ``callback`` with the last pushed value once pushes stop for ``delay`` seconds.

    Must be used from within a running event loop.
    """

    def __init__(self, callback: Callable[[T], None], delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self._callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        """Replace the pending value and restart the timer."""
        self._cancel_timer()
        self._pending = value
        self._handle = asyncio.get_running_loop().call_later(self.delay, self._fire)

    def flush(self) -> None:
        """Deliver the pending value now, if there is one."""
        if self._handle is not None:
            self._cancel_timer()
            self._fire()

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        self._cancel_timer()
        self._pending = None

    def _fire(self) -> None:
        value = self._pending
        self._handle = None
        self._pending = None
        self._callback(value)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
