"""Header hide/show on scroll direction.

Scroll events only schedule an evaluation; at most one evaluation runs per
``interval`` no matter how many events arrive.
"""
import asyncio
from typing import Callable, Optional

from .elements import HeaderElement

SCROLL_DEBOUNCE_SECONDS = 0.02
HIDE_AFTER_PX = 100
BLUR_AFTER_PX = 50
BLUR_CLASS = "backdrop-blur-md"


class ScrollHeaderController:
    """
    Hides the header while scrolling down past ``HIDE_AFTER_PX`` and shows it
    otherwise, adding ``BLUR_CLASS`` once the page is scrolled past
    ``BLUR_AFTER_PX``.
    """

    def __init__(
        self,
        header: Optional[HeaderElement],
        scroll_position: Callable[[], float],
        interval: float = SCROLL_DEBOUNCE_SECONDS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.header = header
        self.scroll_position = scroll_position
        self.interval = interval
        self.last_scroll_top = 0.0
        self.evaluations = 0
        self._loop = loop
        self._pending: Optional[asyncio.TimerHandle] = None

    def on_scroll(self) -> None:
        """Scroll event handler."""
        if self._pending is not None:
            return
        loop = self._loop or asyncio.get_running_loop()
        self._pending = loop.call_later(self.interval, self._evaluate)

    def _evaluate(self) -> None:
        self._pending = None
        self.evaluations += 1
        if self.header is None:
            return

        scroll_top = float(self.scroll_position())
        if scroll_top > self.last_scroll_top and scroll_top > HIDE_AFTER_PX:
            self.header.style["transform"] = "translateY(-100%)"
        else:
            self.header.style["transform"] = "translateY(0)"
            if scroll_top > BLUR_AFTER_PX:
                self.header.class_list.add(BLUR_CLASS)
            else:
                self.header.class_list.discard(BLUR_CLASS)
        self.last_scroll_top = scroll_top

    def close(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
