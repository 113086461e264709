"""Page performance helpers: lazy images and the scroll-aware header."""
import asyncio
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .elements import HeaderElement, ImageElement
from .lazy_images import LazyImageLoader
from .scroll_header import ScrollHeaderController


@dataclass
class PagePerformance:
    images: LazyImageLoader
    header: ScrollHeaderController

    def close(self) -> None:
        self.header.close()


def init_page_performance(
    images: Iterable[ImageElement],
    header: Optional[HeaderElement],
    scroll_position: Callable[[], float],
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> PagePerformance:
    """Wire both behaviors for one page."""
    loader = LazyImageLoader()
    loader.observe_all(images)
    return PagePerformance(
        images=loader,
        header=ScrollHeaderController(header, scroll_position, loop=loop),
    )


__all__ = [
    "HeaderElement",
    "ImageElement",
    "LazyImageLoader",
    "PagePerformance",
    "ScrollHeaderController",
    "init_page_performance",
]
