"""
tuistudio - Layout engine and box renderer for terminal UI designs

A Python library that lays out trees of TUI widgets on a fixed grid of
character cells (absolute, flexbox and grid modes) and draws them with
Unicode box-drawing borders.

Example:
    >>> from tuistudio import ComponentNode, LayoutEngine
    >>> root = ComponentNode(id="root", type="Screen", layout={"type": "absolute"})
    >>> root.children.append(ComponentNode(
    ...     id="ok", type="Button", props={"label": "OK"},
    ...     layout={"type": "absolute", "x": 2, "y": 2}, style={"border": True},
    ... ))
    >>> engine = LayoutEngine()
    >>> engine.calculate_layout(root, 80, 24)
    >>> engine.get_layout("ok")
    ResolvedBox(x=2, y=2, width=6, height=3)

Screen Example:
    >>> from tuistudio import ScreenRenderer
    >>> print(ScreenRenderer().render(root, 80, 24))
"""

from .debug import (
    CanvasInspector,
    format_warning,
    render_overlay,
    visual_diff,
    warnings_summary,
)
from .export import ScreenExporter, suggested_filename
from .layout import LayoutEngine
from .models import (
    CircularDependencyWarning,
    ComponentNode,
    ConstraintViolationWarning,
    Edges,
    LayoutDebugInfo,
    LayoutSpec,
    LayoutWarning,
    NegativeSpaceWarning,
    OverflowWarning,
    ResolvedBox,
    find_node,
    iter_nodes,
)
from .parser import ParseError, Parser, TuiDocument, load_document, parse_document
from .renderer import (
    BORDER_STYLES,
    BorderConfig,
    Canvas,
    get_border_chars,
    get_content_area,
    render_box,
    render_divider,
)
from .screen import ScreenRenderer
from .sizing import content_lines, intrinsic_size
from .tracer import LayoutTrace, TraceRecord

__version__ = "0.1.0"

__all__ = [
    # Main API
    "LayoutEngine",
    "ScreenRenderer",
    # Models
    "ComponentNode",
    "LayoutSpec",
    "Edges",
    "ResolvedBox",
    "LayoutDebugInfo",
    "LayoutWarning",
    "OverflowWarning",
    "ConstraintViolationWarning",
    "NegativeSpaceWarning",
    "CircularDependencyWarning",
    "iter_nodes",
    "find_node",
    # Sizing
    "content_lines",
    "intrinsic_size",
    # Box renderer
    "BORDER_STYLES",
    "BorderConfig",
    "Canvas",
    "get_border_chars",
    "get_content_area",
    "render_box",
    "render_divider",
    # Documents
    "Parser",
    "ParseError",
    "TuiDocument",
    "parse_document",
    "load_document",
    "ScreenExporter",
    "suggested_filename",
    # Debug/Tracing (for development and debugging)
    "LayoutTrace",
    "TraceRecord",
    "CanvasInspector",
    "format_warning",
    "render_overlay",
    "visual_diff",
    "warnings_summary",
]
