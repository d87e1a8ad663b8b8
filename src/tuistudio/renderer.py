"""
Box model and border renderer for TUI screens.

Handles drawing bordered boxes with Unicode box-drawing characters and
computing the interior area a border leaves for content. Everything here
is a pure function of its arguments; malformed configuration falls back
to the conservative defaults (all sides shown, single style, corners on)
rather than raising.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from .models import to_cells

SIDES = ("top", "right", "bottom", "left")

# Glyph sets per border style
BORDER_STYLES: Dict[str, Dict[str, str]] = {
    "single": {
        "top": "─",
        "bottom": "─",
        "left": "│",
        "right": "│",
        "top_left": "┌",
        "top_right": "┐",
        "bottom_left": "└",
        "bottom_right": "┘",
    },
    "double": {
        "top": "═",
        "bottom": "═",
        "left": "║",
        "right": "║",
        "top_left": "╔",
        "top_right": "╗",
        "bottom_left": "╚",
        "bottom_right": "╝",
    },
    "rounded": {
        "top": "─",
        "bottom": "─",
        "left": "│",
        "right": "│",
        "top_left": "╭",
        "top_right": "╮",
        "bottom_left": "╰",
        "bottom_right": "╯",
    },
    "bold": {
        "top": "━",
        "bottom": "━",
        "left": "┃",
        "right": "┃",
        "top_left": "┏",
        "top_right": "┓",
        "bottom_left": "┗",
        "bottom_right": "┛",
    },
    "ascii": {
        "top": "-",
        "bottom": "-",
        "left": "|",
        "right": "|",
        "top_left": "+",
        "top_right": "+",
        "bottom_left": "+",
        "bottom_right": "+",
    },
    # Reserves the border cells but draws nothing
    "hidden": {
        "top": " ",
        "bottom": " ",
        "left": " ",
        "right": " ",
        "top_left": " ",
        "top_right": " ",
        "bottom_left": " ",
        "bottom_right": " ",
    },
}

DEFAULT_STYLE = "single"


def get_border_chars(style: Optional[str]) -> Dict[str, str]:
    """Return the glyph set for style, falling back to single."""
    return BORDER_STYLES.get(style or DEFAULT_STYLE, BORDER_STYLES[DEFAULT_STYLE])


def _flag(value: Any) -> bool:
    """Only an explicit False disables a side or corner."""
    return value is not False


@dataclass(frozen=True)
class BorderConfig:
    """
    Which sides of a box draw a border, and with which glyphs.

    Attributes:
        style: Global style tag; unknown tags render as single.
        top, right, bottom, left: Whether each side reserves and draws a cell.
        top_style, right_style, bottom_style, left_style: Per-side style
            overrides. None means the global style.
        corners: When False, corner cells use the adjoining edge's line
            glyph so adjacent boxes join seamlessly.
    """

    style: str = DEFAULT_STYLE
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True
    top_style: Optional[str] = None
    right_style: Optional[str] = None
    bottom_style: Optional[str] = None
    left_style: Optional[str] = None
    corners: bool = True

    @classmethod
    def from_value(
        cls, value: Union["BorderConfig", Dict[str, Any], str, None]
    ) -> "BorderConfig":
        """
        Normalize a config given as a BorderConfig, a mapping or a style tag.

        Mapping keys may be camelCase (topStyle) or snake_case (top_style).
        """
        if isinstance(value, BorderConfig):
            return value
        if isinstance(value, str):
            return cls(style=value)
        if not isinstance(value, dict):
            return cls()

        def side_style(side: str) -> Optional[str]:
            style = value.get(f"{side}Style", value.get(f"{side}_style"))
            return style if isinstance(style, str) else None

        style = value.get("style")
        return cls(
            style=style if isinstance(style, str) else DEFAULT_STYLE,
            top=_flag(value.get("top")),
            right=_flag(value.get("right")),
            bottom=_flag(value.get("bottom")),
            left=_flag(value.get("left")),
            top_style=side_style("top"),
            right_style=side_style("right"),
            bottom_style=side_style("bottom"),
            left_style=side_style("left"),
            corners=_flag(value.get("corners")),
        )

    @classmethod
    def from_style(cls, style: Optional[Dict[str, Any]]) -> Optional["BorderConfig"]:
        """
        Read a node's style mapping; None when the node has no border.

        Recognized keys: border, borderStyle, borderTop/Right/Bottom/Left,
        borderTopStyle/..., borderCorners.
        """
        if not style or not style.get("border"):
            return None

        def side_style(side: str) -> Optional[str]:
            tag = style.get(f"border{side.capitalize()}Style")
            return tag if isinstance(tag, str) else None

        tag = style.get("borderStyle")
        return cls(
            style=tag if isinstance(tag, str) else DEFAULT_STYLE,
            top=_flag(style.get("borderTop")),
            right=_flag(style.get("borderRight")),
            bottom=_flag(style.get("borderBottom")),
            left=_flag(style.get("borderLeft")),
            top_style=side_style("top"),
            right_style=side_style("right"),
            bottom_style=side_style("bottom"),
            left_style=side_style("left"),
            corners=_flag(style.get("borderCorners")),
        )

    def side_chars(self, side: str) -> Dict[str, str]:
        """Glyphs for one side: its override, else the global style."""
        override = getattr(self, f"{side}_style")
        if override in BORDER_STYLES:
            return BORDER_STYLES[override]
        return get_border_chars(self.style)

    @property
    def cells_horizontal(self) -> int:
        """Cells consumed across the width."""
        return int(self.left) + int(self.right)

    @property
    def cells_vertical(self) -> int:
        """Cells consumed across the height."""
        return int(self.top) + int(self.bottom)


def get_content_area(
    width: Any,
    height: Any,
    config: Union[BorderConfig, Dict[str, Any], str, None] = None,
) -> Dict[str, int]:
    """
    Calculate the interior dimensions left inside a border.

    Subtracts one cell per enabled side; never returns negative sizes.
    Matches exactly the interior render_box fills with content.
    """
    border = BorderConfig.from_value(config)
    return {
        "width": max(0, to_cells(width) - border.cells_horizontal),
        "height": max(0, to_cells(height) - border.cells_vertical),
    }


def _fit_line(text: str, width: int, align: str) -> str:
    """Pad with spaces or truncate so text is exactly width characters."""
    if len(text) >= width:
        return text[:width]
    padding = width - len(text)
    if align == "right":
        return " " * padding + text
    if align == "center":
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


def render_box(
    content: Sequence[str],
    width: Any,
    height: Any,
    config: Union[BorderConfig, Dict[str, Any], str, None] = None,
    align: str = "left",
) -> List[str]:
    """
    Render a box with borders around content.

    Produces height lines of exactly width characters. Content lines are
    padded or clipped to the interior width, never wrapped; lines beyond
    the interior height are dropped.

    Box structure (single style, content ["OK"]):
    ┌────┐
    │ OK │
    └────┘

    Args:
        content: Lines to draw inside the border
        width: Total width including border cells
        height: Total height including border cells
        config: BorderConfig, mapping or style tag
        align: Horizontal placement of content lines: left, center or right

    Returns:
        List of rendered lines
    """
    width = to_cells(width)
    height = to_cells(height)
    border = BorderConfig.from_value(config)

    global_chars = get_border_chars(border.style)
    top_chars = border.side_chars("top")
    bottom_chars = border.side_chars("bottom")
    left_chars = border.side_chars("left")
    right_chars = border.side_chars("right")

    area = get_content_area(width, height, border)
    inner_width = area["width"]
    content_height = area["height"]

    lines: List[str] = []

    if border.top:
        if border.corners:
            top_left, top_right = global_chars["top_left"], global_chars["top_right"]
        else:
            top_left = top_right = top_chars["top"]
        lines.append(
            (top_left if border.left else "")
            + top_chars["top"] * inner_width
            + (top_right if border.right else "")
        )

    left_edge = left_chars["left"] if border.left else ""
    right_edge = right_chars["right"] if border.right else ""
    for row in range(content_height):
        text = content[row] if row < len(content) else ""
        lines.append(left_edge + _fit_line(str(text), inner_width, align) + right_edge)

    if border.bottom:
        if border.corners:
            bottom_left = global_chars["bottom_left"]
            bottom_right = global_chars["bottom_right"]
        else:
            bottom_left = bottom_right = bottom_chars["bottom"]
        lines.append(
            (bottom_left if border.left else "")
            + bottom_chars["bottom"] * inner_width
            + (bottom_right if border.right else "")
        )

    # Boxes smaller than their own border: keep the exact height x width shape
    lines = [_fit_line(line, width, "left") for line in lines[:height]]
    while len(lines) < height:
        lines.append(" " * width)
    return lines


def render_divider(width: Any, style: str = DEFAULT_STYLE, char: Optional[str] = None) -> str:
    """Render a horizontal divider line of exactly width characters."""
    width = to_cells(width)
    glyph = char or get_border_chars(style)["top"]
    return (glyph * width)[:width]


class Canvas:
    """
    A 2D character canvas for drawing TUI screens.
    """

    def __init__(self, width: int, height: int, fill_char: str = " "):
        self.width = max(0, width)
        self.height = max(0, height)
        self.fill_char = fill_char
        self.grid: List[List[str]] = [
            [fill_char for _ in range(self.width)] for _ in range(self.height)
        ]

    def set(self, x: int, y: int, char: str) -> None:
        """Set a character at position (x, y)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.grid[y][x] = char

    def get(self, x: int, y: int) -> str:
        """Get character at position (x, y)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.grid[y][x]
        return " "

    def draw_text(self, x: int, y: int, text: str, max_width: Optional[int] = None) -> None:
        """Draw text starting at position (x, y), clipped to max_width."""
        if max_width is not None:
            text = text[: max(0, max_width)]
        for i, char in enumerate(text):
            self.set(x + i, y, char)

    def draw_lines(self, x: int, y: int, lines: Sequence[str]) -> None:
        """Draw a block of lines with its top-left corner at (x, y)."""
        for row, line in enumerate(lines):
            self.draw_text(x, y + row, line)

    def lines(self) -> List[str]:
        """Return every row at full width."""
        return ["".join(row) for row in self.grid]

    def render(self) -> str:
        """Render the canvas to a string."""
        lines = []
        for row in self.grid:
            line = "".join(row).rstrip()
            lines.append(line)

        # Remove trailing empty lines
        while lines and not lines[-1]:
            lines.pop()

        return "\n".join(lines)
