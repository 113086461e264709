"""Lazy image activation.

Images carry their real URL in ``data-src``. When an observed image comes
within ``root_margin`` pixels of the viewport its source is promoted, it
fades in once loaded, and it is no longer observed.
"""
from typing import Iterable, List

from storefront.logging import get_logger

from .elements import ImageElement

logger = get_logger(__name__)

ROOT_MARGIN_PX = 200.0
INTERSECTION_THRESHOLD = 0.01
FADE_TRANSITION = "opacity 0.35s ease-in-out"


class LazyImageLoader:
    """Fire-once activation of deferred images."""

    def __init__(self, root_margin: float = ROOT_MARGIN_PX, threshold: float = INTERSECTION_THRESHOLD):
        self.root_margin = root_margin
        self.threshold = threshold
        self._observed: List[ImageElement] = []

    @property
    def observed(self) -> List[ImageElement]:
        return list(self._observed)

    def observe(self, img: ImageElement) -> None:
        if not img.loading:
            img.loading = "lazy"
        if not any(o is img for o in self._observed):
            self._observed.append(img)

    def observe_all(self, images: Iterable[ImageElement]) -> None:
        for img in images:
            self.observe(img)

    def unobserve(self, img: ImageElement) -> None:
        self._observed = [o for o in self._observed if o is not img]

    def _is_intersecting(self, img: ImageElement, scroll_top: float, viewport_height: float) -> bool:
        area_top = scroll_top - self.root_margin
        area_bottom = scroll_top + viewport_height + self.root_margin
        overlap = min(img.bottom, area_bottom) - max(img.top, area_top)
        if img.height <= 0:
            # Zero-height boxes count once their edge is inside the area
            return area_top <= img.top <= area_bottom
        return overlap > 0 and overlap / img.height >= self.threshold

    def check(self, scroll_top: float, viewport_height: float) -> List[ImageElement]:
        """Activate every observed image near the viewport. Returns the activated ones."""
        activated = [
            img for img in self._observed
            if self._is_intersecting(img, scroll_top, viewport_height)
        ]
        for img in activated:
            self._activate(img)
        return activated

    def _activate(self, img: ImageElement) -> None:
        deferred = img.dataset.get("src")
        if deferred and not img.src:
            img.src = deferred
        if not img.loading:
            img.loading = "lazy"

        img.style.setdefault("opacity", "0")

        def _fade_in() -> None:
            img.style["transition"] = FADE_TRANSITION
            img.style["opacity"] = "1"

        img.add_load_listener(_fade_in)
        self.unobserve(img)
        logger.debug("Activated lazy image %s", img.src)
