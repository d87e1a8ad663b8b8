"""
Screen rendering module.

Combines layout and the box renderer to draw a whole component tree as
terminal text, the way the editor canvas previews it.
"""

import logging
from typing import List, Optional

from .layout import LayoutEngine
from .models import ComponentNode, ResolvedBox, iter_nodes, to_cells
from .renderer import BorderConfig, Canvas, render_box
from .sizing import content_lines

logger = logging.getLogger(__name__)


class ScreenRenderer:
    """
    Draw a component tree onto a character canvas.

    Nodes are drawn in tree pre-order, so children paint over their
    parents. Bordered nodes are opaque: their whole box is cleared and
    framed before their text is centered in the content region.

    Example:
        >>> renderer = ScreenRenderer()
        >>> print(renderer.render(root, 80, 24))
    """

    def __init__(
        self,
        fill_char: str = " ",
        draw_borderless_text: bool = True,
        trace: bool = False,
    ):
        """
        Initialize the screen renderer.

        Args:
            fill_char: Character for cells no node draws on
            draw_borderless_text: Whether leaves without a border draw their text
            trace: Record a LayoutTrace of each layout pass
        """
        if not isinstance(fill_char, str) or len(fill_char) != 1:
            raise ValueError("fill_char must be a single character")

        self.fill_char = fill_char
        self.draw_borderless_text = draw_borderless_text
        self.layout_engine = LayoutEngine(trace=trace)

    def render(self, root: Optional[ComponentNode], width: int, height: int) -> str:
        """
        Lay out root in a width x height viewport and draw it.

        Returns:
            The screen as text, trailing blank space trimmed
        """
        return self.render_canvas(root, width, height).render()

    def render_lines(
        self, root: Optional[ComponentNode], width: int, height: int
    ) -> List[str]:
        """Like render, but every row is kept at full width."""
        return self.render_canvas(root, width, height).lines()

    def render_canvas(
        self, root: Optional[ComponentNode], width: int, height: int
    ) -> Canvas:
        width = to_cells(width)
        height = to_cells(height)
        self.layout_engine.calculate_layout(root, width, height)

        canvas = Canvas(width, height, self.fill_char)
        drawn = 0
        for node in iter_nodes(root):
            box = self.layout_engine.get_layout(node.id)
            if box is None or box.width == 0 or box.height == 0:
                continue
            self._draw_node(canvas, node, box)
            drawn += 1

        logger.debug("Drew %d nodes on a %dx%d screen", drawn, width, height)
        return canvas

    def _draw_node(self, canvas: Canvas, node: ComponentNode, box: ResolvedBox) -> None:
        content = self.layout_engine.get_content_box(node.id) or box
        lines = content_lines(node)

        border = BorderConfig.from_style(node.style)
        if border is not None:
            canvas.draw_lines(box.x, box.y, render_box([], box.width, box.height, border))
            self._draw_text(canvas, lines, content, centered=True)
        elif lines and self.draw_borderless_text:
            self._draw_text(canvas, lines, content, centered=False)

    @staticmethod
    def _draw_text(
        canvas: Canvas, lines: List[str], region: ResolvedBox, centered: bool
    ) -> None:
        """Draw lines inside region, clipped and never wrapped."""
        for row, line in enumerate(lines[: region.height]):
            text = line[: region.width]
            offset = (region.width - len(text)) // 2 if centered else 0
            canvas.draw_text(region.x + offset, region.y + row, text)
