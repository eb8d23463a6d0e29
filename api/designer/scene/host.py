"""Host scene-graph boundary.

The renderer and controller only talk to a design surface through this
capability set: node factories, an asynchronous font loader, the current
page container, viewport focus and transient user notifications.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Protocol, Sequence


@dataclass(frozen=True)
class FontName:
    family: str
    style: str


class SceneNode(Protocol):
    """Minimal surface shared by every node a host creates."""
    name: str
    x: float
    y: float

    def resize(self, width: float, height: float) -> None:
        ...


class ContainerNode(Protocol):
    children: List[Any]

    def append_child(self, node: Any) -> None:
        ...


def supports_fills(node: Any) -> bool:
    """True when the node exposes a replaceable fill list."""
    return hasattr(node, "fills")


class SceneHost(ABC):
    """Capabilities a design surface must offer to render specifications."""

    @abstractmethod
    def create_frame(self) -> Any:
        ...

    @abstractmethod
    def create_rectangle(self) -> Any:
        ...

    @abstractmethod
    def create_text(self) -> Any:
        ...

    @abstractmethod
    def create_ellipse(self) -> Any:
        ...

    @abstractmethod
    def create_line(self) -> Any:
        ...

    @abstractmethod
    async def load_font_async(self, font: FontName) -> None:
        """Resolve once ``font`` may be used for character and font assignment."""

    @property
    @abstractmethod
    def current_page(self) -> ContainerNode:
        ...

    @abstractmethod
    def scroll_and_zoom_into_view(self, nodes: Sequence[Any]) -> None:
        ...

    @abstractmethod
    def notify(self, message: str) -> None:
        ...
