"""In-memory scene host.

A reference implementation of ``SceneHost`` that keeps nodes as plain Python
objects. It enforces the same rules a real design surface does, so pipeline
behaviour can be exercised without one:

- text characters and font properties may only be written once the node's
  current font has been loaded;
- sizes below 0.01 are rejected, and lines must have zero height;
- lines carry strokes only and expose no fill list.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.config import settings
from ..models.exceptions import FontUnavailableError
from .host import FontName, SceneHost

logger = logging.getLogger(__name__)

MIN_SIZE = 0.01

_node_ids = itertools.count(1)


def _solid(r: float, g: float, b: float) -> List[Dict[str, Any]]:
    return [{"type": "SOLID", "color": {"r": r, "g": g, "b": b}}]


class MemoryNode:
    node_type = "NODE"

    def __init__(self, host: "MemorySceneHost"):
        self.id = f"{next(_node_ids)}:0"
        self.host = host
        self.name = self.node_type.title()
        self.x: float = 0
        self.y: float = 0
        self.width: float = 100
        self.height: float = 100
        self.parent: Optional[Any] = None

    def resize(self, width: float, height: float) -> None:
        if width < MIN_SIZE or height < MIN_SIZE:
            raise ValueError(f"Cannot resize {self.node_type} to {width}x{height}: minimum size is {MIN_SIZE}")
        self.width = width
        self.height = height

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.node_type,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if hasattr(self, "fills"):
            data["fills"] = [dict(f) for f in self.fills]
        return data


class _ChildList:
    """Mixin for nodes that own children."""

    children: List[MemoryNode]

    def append_child(self, node: MemoryNode) -> None:
        if node.parent is not None:
            node.parent.children.remove(node)
        node.parent = self
        self.children.append(node)


class FrameNode(_ChildList, MemoryNode):
    node_type = "FRAME"

    def __init__(self, host: "MemorySceneHost"):
        super().__init__(host)
        self.fills: List[Dict[str, Any]] = _solid(1, 1, 1)
        self.children = []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["children"] = [child.to_dict() for child in self.children]
        return data


class RectangleNode(MemoryNode):
    node_type = "RECTANGLE"

    def __init__(self, host: "MemorySceneHost"):
        super().__init__(host)
        self.fills: List[Dict[str, Any]] = _solid(0.85, 0.85, 0.85)


class EllipseNode(MemoryNode):
    node_type = "ELLIPSE"

    def __init__(self, host: "MemorySceneHost"):
        super().__init__(host)
        self.fills: List[Dict[str, Any]] = _solid(0.85, 0.85, 0.85)


class LineNode(MemoryNode):
    node_type = "LINE"

    def __init__(self, host: "MemorySceneHost"):
        super().__init__(host)
        self.height = 0
        self.strokes: List[Dict[str, Any]] = _solid(0, 0, 0)

    def resize(self, width: float, height: float) -> None:
        if height != 0:
            raise ValueError("Lines must have a height of 0")
        if width < MIN_SIZE:
            raise ValueError(f"Cannot resize LINE to width {width}: minimum size is {MIN_SIZE}")
        self.width = width
        self.height = height


class TextNode(MemoryNode):
    node_type = "TEXT"

    def __init__(self, host: "MemorySceneHost"):
        super().__init__(host)
        self.fills: List[Dict[str, Any]] = _solid(0, 0, 0)
        self._font_name = FontName(host.default_font_family, "Regular")
        self._characters = ""
        self._font_size: float = 12

    def _require_loaded(self, font: FontName) -> None:
        if not self.host.is_font_loaded(font):
            raise RuntimeError(
                f"Cannot write to node with unloaded font \"{font.family} {font.style}\""
            )

    @property
    def font_name(self) -> FontName:
        return self._font_name

    @font_name.setter
    def font_name(self, font: FontName) -> None:
        self._require_loaded(font)
        self._font_name = font

    @property
    def characters(self) -> str:
        return self._characters

    @characters.setter
    def characters(self, value: str) -> None:
        self._require_loaded(self._font_name)
        self._characters = value

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, value: float) -> None:
        self._require_loaded(self._font_name)
        if value < 1:
            raise ValueError(f"Font size must be at least 1, got {value}")
        self._font_size = value

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "characters": self._characters,
            "fontSize": self._font_size,
            "fontName": {"family": self._font_name.family, "style": self._font_name.style},
        })
        return data


class PageNode(_ChildList):
    node_type = "PAGE"

    def __init__(self, name: str = "Page 1"):
        self.name = name
        self.children = []


class MemorySceneHost(SceneHost):
    """Scene host backed by Python objects."""

    DEFAULT_STYLES = ("Regular", "Bold")

    def __init__(self,
                 available_fonts: Optional[Iterable[FontName]] = None,
                 default_font_family: Optional[str] = None):
        self.default_font_family = default_font_family or settings.default_font_family
        if available_fonts is None:
            available_fonts = [FontName(self.default_font_family, style) for style in self.DEFAULT_STYLES]
        self.available_fonts = set(available_fonts)
        self.loaded_fonts: set = set()
        self.font_requests: List[FontName] = []
        self.notifications: List[str] = []
        self.viewport: List[Any] = []
        self._page = PageNode()

    def create_frame(self) -> FrameNode:
        return FrameNode(self)

    def create_rectangle(self) -> RectangleNode:
        return RectangleNode(self)

    def create_text(self) -> TextNode:
        return TextNode(self)

    def create_ellipse(self) -> EllipseNode:
        return EllipseNode(self)

    def create_line(self) -> LineNode:
        return LineNode(self)

    async def load_font_async(self, font: FontName) -> None:
        self.font_requests.append(font)
        # Yield like a real font subsystem would
        await asyncio.sleep(0)
        if font not in self.available_fonts:
            raise FontUnavailableError(font.family, font.style)
        self.loaded_fonts.add(font)

    def is_font_loaded(self, font: FontName) -> bool:
        return font in self.loaded_fonts

    @property
    def current_page(self) -> PageNode:
        return self._page

    def scroll_and_zoom_into_view(self, nodes: Sequence[Any]) -> None:
        self.viewport = list(nodes)

    def notify(self, message: str) -> None:
        logger.info(f"Host notification: {message}")
        self.notifications.append(message)

    def snapshot(self) -> List[Dict[str, Any]]:
        """Serialize every node on the current page."""
        return [node.to_dict() for node in self._page.children]
