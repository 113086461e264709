"""Minimal page element models.

Each helper owns only the elements handed to it; nothing here reaches into
a global document.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Set


@dataclass(eq=False)
class ImageElement:
    """An ``<img>`` with a deferred ``data-src`` and its layout box."""
    src: str = ""
    dataset: Dict[str, str] = field(default_factory=dict)
    loading: str = ""
    style: Dict[str, str] = field(default_factory=dict)
    top: float = 0.0  # offset from the top of the document, px
    height: float = 0.0
    _load_listeners: List[Callable[[], None]] = field(default_factory=list, repr=False)

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def add_load_listener(self, callback: Callable[[], None]) -> None:
        """Register a one-shot ``load`` listener."""
        self._load_listeners.append(callback)

    def dispatch_load(self) -> None:
        """Signal that the image finished loading."""
        listeners, self._load_listeners = self._load_listeners, []
        for callback in listeners:
            callback()


@dataclass(eq=False)
class HeaderElement:
    """The fixed site header."""
    style: Dict[str, str] = field(default_factory=dict)
    class_list: Set[str] = field(default_factory=set)
    top: float = 0.0

    @property
    def hidden(self) -> bool:
        return self.style.get("transform") == "translateY(-100%)"
