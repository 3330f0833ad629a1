"""
Debounced stop-name suggestions for the entry form.
"""

import logging
import threading
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.5


def filter_suggestions(query: str, options: Iterable[str]) -> list[str]:
    """
    Options containing the query, ignoring case.

    A blank query gives no suggestions.
    """
    if not query or not query.strip():
        return []
    needle = query.lower()
    return [option for option in options if needle in option.lower()]


class Debouncer:
    """
    Single-shot timer that restarts on every call.

    Only the last call within ``delay`` seconds runs. The callback runs on
    the timer thread; UI code marshals it back to the main loop.
    """

    def __init__(self, delay: float = DEFAULT_DELAY):
        self.delay = delay
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def call(self, func: Callable[..., None], *args, **kwargs) -> None:
        """Cancel any pending call and schedule ``func`` after the delay."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, func, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()


class SuggestionFilter:
    """
    Recomputes suggestions for one text field after typing pauses.

    Args:
        options: Callable returning the current option list, so next-stop
            options can follow the chosen current stop.
        on_suggestions: Receives the filtered list.
        delay: Debounce delay in seconds.
    """

    def __init__(
        self,
        options: Callable[[], Iterable[str]],
        on_suggestions: Callable[[list[str]], None],
        delay: float = DEFAULT_DELAY,
    ):
        self._options = options
        self._on_suggestions = on_suggestions
        self._debouncer = Debouncer(delay)

    def text_changed(self, text: str) -> None:
        self._debouncer.call(self._emit, text)

    def _emit(self, text: str) -> None:
        suggestions = filter_suggestions(text, self._options())
        logger.debug(f"{len(suggestions)} suggestions for '{text}'")
        self._on_suggestions(suggestions)

    def cancel(self) -> None:
        self._debouncer.cancel()
