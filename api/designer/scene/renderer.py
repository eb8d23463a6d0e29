"""Scene rendering engine.

Walks a DesignElement tree depth-first and builds the matching nodes on a
``SceneHost``. Parents are fully constructed before their children, and each
child is appended to its parent before the walk moves on to the next one.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..core.config import settings
from ..models.exceptions import ElementRenderError
from ..models.schemas import DesignElement, ElementType
from .host import FontName, SceneHost, supports_fills

logger = logging.getLogger(__name__)

BOLD_WEIGHT_THRESHOLD = 500


class SceneRenderer:
    """Builds host nodes from design elements.

    Child failures inside a frame are isolated: the failing child is logged,
    recorded in ``failures`` and skipped while its siblings are still built.
    A failure building an element's own node raises ``ElementRenderError``.
    """

    def __init__(self, host: SceneHost, font_family: Optional[str] = None):
        self.host = host
        self.regular_font = FontName(font_family or settings.default_font_family, "Regular")
        self.bold_font = FontName(self.regular_font.family, "Bold")
        self.failures: List[ElementRenderError] = []

    async def render(self, element: DesignElement, parent: Optional[Any] = None) -> Any:
        """Create the node for ``element`` and, for frames, its subtree."""
        if parent is not None:
            logger.debug(f"Rendering {element.type} '{element.name}' inside '{getattr(parent, 'name', '?')}'")
        try:
            node = await self._create_node(element)
            self._apply_common(node, element)
        except ElementRenderError:
            raise
        except Exception as e:
            raise ElementRenderError(element.name, element.type, cause=e) from e

        if element.is_frame and element.children:
            for child in element.children:
                try:
                    child_node = await self.render(child, parent=node)
                    node.append_child(child_node)
                except ElementRenderError as e:
                    self._record_failure(e, parent=element)
                except Exception as e:
                    self._record_failure(ElementRenderError(child.name, child.type, cause=e), parent=element)
        return node

    async def _create_node(self, element: DesignElement) -> Any:
        element_type = element.element_type

        if element_type is ElementType.FRAME:
            node = self.host.create_frame()
        elif element_type is ElementType.TEXT:
            node = self.host.create_text()
            await self._configure_text(node, element)
        elif element_type is ElementType.ELLIPSE:
            node = self.host.create_ellipse()
        elif element_type is ElementType.LINE:
            node = self.host.create_line()
        elif element_type is ElementType.RECTANGLE:
            node = self.host.create_rectangle()
        else:
            logger.debug(f"Unknown element type '{element.type}' for '{element.name}', using rectangle")
            node = self.host.create_rectangle()

        node.resize(element.width, element.height)
        return node

    async def _configure_text(self, node: Any, element: DesignElement) -> None:
        # Characters and font properties can only be written once the font is ready
        await self.host.load_font_async(self.regular_font)
        node.characters = element.text or ""
        if element.font_size:
            node.font_size = element.font_size

        if element.font_weight and element.font_weight > BOLD_WEIGHT_THRESHOLD:
            try:
                await self.host.load_font_async(self.bold_font)
                node.font_name = self.bold_font
            except Exception as e:
                logger.error(f"Error loading bold font, keeping regular style: {e}")

    def _apply_common(self, node: Any, element: DesignElement) -> None:
        node.name = element.name
        node.x = element.x
        node.y = element.y

        if element.fills is not None and supports_fills(node):
            node.fills = [
                {"type": "SOLID", "color": fill.color.model_dump()}
                for fill in element.fills
            ]

    def _record_failure(self, error: ElementRenderError, parent: DesignElement) -> None:
        logger.warning(
            f"Skipping child '{error.element_name}' of '{parent.name}': {error.message}"
        )
        self.failures.append(error)
