"""
Debug utilities for tuistudio.

This module provides the tools behind the editor's layout debug panel:
human-readable warning strings, the warnings summary, an outline overlay
of every resolved box, and a character-level diff for comparing screens.

Key Components:
- format_warning: One-line description of a LayoutWarning
- warnings_summary: The debug panel text for a laid-out tree
- render_overlay: Draw every box outline in ascii glyphs
- visual_diff: Compare two rendered screens character-by-character
- CanvasInspector: Utilities for inspecting canvas state

Usage:
    >>> engine = LayoutEngine()
    >>> engine.calculate_layout(root, 80, 24)
    >>> print(warnings_summary(engine, root))
    >>> print(render_overlay(engine, root, 80, 24))

    # For comparing expected vs actual output:
    >>> from tuistudio.debug import visual_diff
    >>> print(visual_diff(expected_screen, actual_screen))
"""

from typing import List, Optional, Tuple

from .layout import LayoutEngine
from .models import (
    CircularDependencyWarning,
    ComponentNode,
    ConstraintViolationWarning,
    LayoutWarning,
    NegativeSpaceWarning,
    OverflowWarning,
    ResolvedBox,
    find_node,
    iter_nodes,
)
from .renderer import BORDER_STYLES, Canvas

OVERLAY_CHARS = BORDER_STYLES["ascii"]


def format_warning(warning: LayoutWarning) -> str:
    """
    Describe a warning the way the debug panel shows it.

    Example:
        >>> format_warning(OverflowWarning("horizontal", 6))
        'Overflow horizontal-axis: 6 cols/rows'
    """
    if isinstance(warning, OverflowWarning):
        return f"Overflow {warning.axis}-axis: {warning.amount} cols/rows"
    if isinstance(warning, ConstraintViolationWarning):
        return f"Constraint violation: {warning.constraint}"
    if isinstance(warning, NegativeSpaceWarning):
        return f"Negative {warning.dimension}"
    if isinstance(warning, CircularDependencyWarning):
        return "Circular dependency detected"
    return "Unknown warning"


def warnings_summary(
    engine: LayoutEngine, root: Optional[ComponentNode], limit: int = 3
) -> str:
    """
    Render the debug panel summary for the engine's current layout.

    Lists the first limit nodes carrying warnings (by display name) with
    their warnings, then how many more were left out. Returns an empty
    string when there is nothing to report.

    Example output:
        2 Layout Warnings
          Toolbar: Overflow horizontal-axis: 6 cols/rows
          Sidebar: Negative width
    """
    node_ids = engine.get_nodes_with_warnings()
    if root is None or not node_ids:
        return ""

    count = len(node_ids)
    lines = [f"{count} Layout Warning{'' if count == 1 else 's'}"]
    for node_id in node_ids[:limit]:
        node = find_node(root, node_id)
        info = engine.get_debug_info(node_id)
        if node is None or info is None:
            continue
        described = ", ".join(format_warning(w) for w in info.warnings)
        lines.append(f"  {node.name}: {described}")

    if count > limit:
        lines.append(f"  ... and {count - limit} more")
    return "\n".join(lines)


def _draw_outline(canvas: Canvas, box: ResolvedBox) -> None:
    if box.width <= 0 or box.height <= 0:
        return
    left, top = box.x, box.y
    right, bottom = box.right - 1, box.bottom - 1

    for x in range(left, right + 1):
        canvas.set(x, top, OVERLAY_CHARS["top"])
        canvas.set(x, bottom, OVERLAY_CHARS["bottom"])
    for y in range(top, bottom + 1):
        canvas.set(left, y, OVERLAY_CHARS["left"])
        canvas.set(right, y, OVERLAY_CHARS["right"])

    canvas.set(left, top, OVERLAY_CHARS["top_left"])
    canvas.set(right, top, OVERLAY_CHARS["top_right"])
    canvas.set(left, bottom, OVERLAY_CHARS["bottom_left"])
    canvas.set(right, bottom, OVERLAY_CHARS["bottom_right"])


def render_overlay(
    engine: LayoutEngine,
    root: Optional[ComponentNode],
    width: int,
    height: int,
    labels: bool = True,
) -> str:
    """
    Draw the outline of every resolved box, parents first.

    Useful for seeing where the engine put things without any widget
    content in the way. With labels on, each node's name is written
    along the top edge of its box.
    """
    canvas = Canvas(width, height)
    for node in iter_nodes(root):
        box = engine.get_layout(node.id)
        if box is None:
            continue
        _draw_outline(canvas, box)
        if labels and box.width > 2:
            canvas.draw_text(box.x + 1, box.y, node.name, max_width=box.width - 2)
    return canvas.render()


def visual_diff(expected: str, actual: str, context_lines: int = 2) -> str:
    """
    Generate a visual character-by-character diff between two screens.

    This is useful for debugging test failures where the expected and actual
    outputs differ. It shows exactly where the differences are and what
    characters differ.

    Args:
        expected: The expected screen text
        actual: The actual screen text
        context_lines: Number of matching lines to show around differences

    Returns:
        A formatted string showing the differences
    """
    exp_lines = expected.split("\n")
    act_lines = actual.split("\n")

    output: List[str] = ["=" * 60, "VISUAL DIFF", "=" * 60]

    max_lines = max(len(exp_lines), len(act_lines))
    diff_rows = [
        i
        for i in range(max_lines)
        if (exp_lines[i] if i < len(exp_lines) else "")
        != (act_lines[i] if i < len(act_lines) else "")
    ]

    if not diff_rows:
        output.append("No differences found.")
        return "\n".join(output)

    output.append(f"Found {len(diff_rows)} differing line(s)")
    output.append("")

    shown = set()
    for row in diff_rows:
        start = max(0, row - context_lines)
        end = min(max_lines, row + context_lines + 1)
        shown.update(range(start, end))

    prev_shown = -2
    for i in sorted(shown):
        if i > prev_shown + 1:
            output.append("...")

        exp_line = exp_lines[i] if i < len(exp_lines) else ""
        act_line = act_lines[i] if i < len(act_lines) else ""

        if exp_line == act_line:
            output.append(f"{i:3d}:   {act_line}")
        else:
            output.append(f"{i:3d}: E |{exp_line}|")
            output.append(f"     A |{act_line}|")

            width = max(len(exp_line), len(act_line))
            columns = [
                j
                for j in range(width)
                if (exp_line[j] if j < len(exp_line) else "")
                != (act_line[j] if j < len(act_line) else "")
            ]
            # Marker row lines up under the "     A |" prefix
            marker = [" "] * (width + 8)
            for col in columns:
                marker[col + 8] = "^"
            output.append("".join(marker).rstrip())
            output.append(
                f"     Diff at col(s): {columns[:5]}"
                f"{'...' if len(columns) > 5 else ''}"
            )

        prev_shown = i

    return "\n".join(output)


class CanvasInspector:
    """
    Utilities for inspecting canvas state.

    Provides methods for finding characters on a canvas and extracting
    rows and regions, mostly for tests of drawn screens.
    """

    def __init__(self, canvas: Canvas):
        self._canvas = canvas

    def find_char(self, char: str) -> List[Tuple[int, int]]:
        """Find all (x, y) positions of a character."""
        return [
            (x, y)
            for y in range(self._canvas.height)
            for x in range(self._canvas.width)
            if self._canvas.get(x, y) == char
        ]

    def count_char(self, char: str) -> int:
        """Count occurrences of a character."""
        return len(self.find_char(char))

    def get_row(self, y: int) -> str:
        """Get a single row as a string."""
        if 0 <= y < self._canvas.height:
            return "".join(self._canvas.get(x, y) for x in range(self._canvas.width))
        return ""

    def get_region(self, box: ResolvedBox) -> List[str]:
        """Get the rows covered by a resolved box."""
        return [
            "".join(self._canvas.get(x, y) for x in range(box.x, box.right))
            for y in range(box.y, box.bottom)
        ]
