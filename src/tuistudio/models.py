"""
Data models for TUI layout.

This module contains the dataclasses shared by the layout engine, the box
renderer and the document parser: the component tree itself, the layout
intent each node declares, and the resolved geometry and diagnostics the
engine produces for it.

Classes:
    Edges: Four-sided cell spacing used for padding and margin.
    LayoutSpec: Layout intent of a node (absolute, flexbox, grid or none).
    ComponentNode: A node of the component tree.
    ResolvedBox: Integer cell rectangle relative to the viewport origin.
    LayoutWarning: Base class for the non-fatal layout diagnostics.
    LayoutDebugInfo: Per-node result record exposed to debug overlays.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple

LAYOUT_MODES = ("absolute", "flexbox", "grid", "none")
DIRECTIONS = ("row", "column")
JUSTIFY_VALUES = ("start", "center", "end", "space-between", "space-around")
ALIGN_VALUES = ("start", "center", "end", "stretch")

DEFAULT_GRID_TRACKS = 2

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


def to_number(value: Any) -> Optional[float]:
    """Return value as a finite number, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_cells(value: Any, default: int = 0) -> int:
    """
    Normalize a layout value to a non-negative whole number of cells.

    Fractions are truncated, never rounded up, so a value can never grow
    past the cell it was meant to fill.
    """
    number = to_number(value)
    if number is None:
        return default
    return max(0, int(number))


@dataclass(frozen=True)
class Edges:
    """Spacing on the four sides of a box, in cells."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def from_value(cls, value: Any) -> "Edges":
        """
        Build Edges from a uniform number or a top/right/bottom/left mapping.

        Anything else (None, malformed values) yields zero spacing.
        """
        if isinstance(value, Edges):
            return value
        if isinstance(value, dict):
            return cls(
                top=to_cells(value.get("top")),
                right=to_cells(value.get("right")),
                bottom=to_cells(value.get("bottom")),
                left=to_cells(value.get("left")),
            )
        uniform = to_cells(value)
        return cls(uniform, uniform, uniform, uniform)

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom

    def along(self, dimension: str) -> int:
        """Total spacing consumed along "width" or "height"."""
        return self.horizontal if dimension == "width" else self.vertical

    def to_value(self) -> Any:
        """Serialize back to a number when uniform, else to a mapping."""
        if self.top == self.right == self.bottom == self.left:
            return self.top
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass(frozen=True)
class LayoutSpec:
    """
    Layout intent of a node.

    The mode decides how the node arranges its children; the remaining
    fields only matter for the mode that reads them. Padding and margin
    apply in every mode.

    Attributes:
        mode: "absolute", "flexbox", "grid" or "none" (normal flow).
        x: Column offset from the parent's content origin (absolute).
        y: Row offset from the parent's content origin (absolute).
        direction: Flexbox main axis, "row" or "column".
        justify: Flexbox main-axis distribution.
        align: Flexbox cross-axis placement.
        gap: Cells between flexbox children (and between wrapped lines).
        wrap: Whether flexbox children wrap onto new lines.
        columns: Grid column count.
        rows: Grid row count.
        column_gap: Cells between grid columns.
        row_gap: Cells between grid rows.
        padding: Spacing inside the border, around the children.
        margin: Spacing outside the border.
    """

    mode: str = "none"
    x: int = 0
    y: int = 0
    direction: str = "row"
    justify: str = "start"
    align: str = "start"
    gap: int = 0
    wrap: bool = False
    columns: int = DEFAULT_GRID_TRACKS
    rows: int = DEFAULT_GRID_TRACKS
    column_gap: int = 0
    row_gap: int = 0
    padding: Edges = field(default_factory=Edges)
    margin: Edges = field(default_factory=Edges)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LayoutSpec":
        """
        Build a LayoutSpec from the editor's camelCase layout mapping.

        Unknown tags fall back to defaults instead of raising, since the
        editor can hand over half-edited layouts at any time.
        """
        if isinstance(data, LayoutSpec):
            return data
        if not isinstance(data, dict):
            return cls()

        mode = str(data.get("type", data.get("mode", "none"))).lower()
        direction = str(data.get("direction", "row")).lower()
        justify = str(data.get("justify", "start")).lower()
        align = str(data.get("align", "start")).lower()

        return cls(
            mode=mode if mode in LAYOUT_MODES else "none",
            x=to_cells(data.get("x")),
            y=to_cells(data.get("y")),
            direction=direction if direction in DIRECTIONS else "row",
            justify=justify if justify in JUSTIFY_VALUES else "start",
            align=align if align in ALIGN_VALUES else "start",
            gap=to_cells(data.get("gap")),
            wrap=bool(data.get("wrap", False)),
            columns=to_cells(data.get("columns")) or DEFAULT_GRID_TRACKS,
            rows=to_cells(data.get("rows")) or DEFAULT_GRID_TRACKS,
            column_gap=to_cells(data.get("columnGap", data.get("column_gap"))),
            row_gap=to_cells(data.get("rowGap", data.get("row_gap"))),
            padding=Edges.from_value(data.get("padding")),
            margin=Edges.from_value(data.get("margin")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the editor's camelCase layout mapping."""
        data: Dict[str, Any] = {"type": self.mode}
        if self.mode == "absolute":
            data.update({"x": self.x, "y": self.y})
        elif self.mode == "flexbox":
            data.update(
                {
                    "direction": self.direction,
                    "justify": self.justify,
                    "align": self.align,
                    "gap": self.gap,
                    "wrap": self.wrap,
                }
            )
        elif self.mode == "grid":
            data.update(
                {
                    "columns": self.columns,
                    "rows": self.rows,
                    "columnGap": self.column_gap,
                    "rowGap": self.row_gap,
                }
            )
        data["padding"] = self.padding.to_value()
        data["margin"] = self.margin.to_value()
        return data


@dataclass
class ComponentNode:
    """
    A node of the component tree.

    Each node owns its children exclusively; lookups by id go through a
    side index (see iter_nodes / find_node) rather than parent pointers.

    Attributes:
        id: Unique identity, stable across edits.
        type: Widget kind (Screen, Box, Button, Text, ...).
        name: Display name used by the layers panel.
        props: Widget configuration. Only width/height (and their min/max
            variants) are read by the layout engine.
        layout: Layout intent. A plain mapping is converted on creation.
        style: Visual attributes. The engine reads border/borderStyle.
        children: Ordered child nodes.
        events: Pass-through event bindings, kept for round-tripping.
        hidden: Hidden nodes receive no box and take no space.
        locked: Editor flag, not read by the engine.
        collapsed: Editor flag, not read by the engine.
    """

    id: str
    type: str = "Box"
    name: str = ""
    props: Dict[str, Any] = field(default_factory=dict)
    layout: LayoutSpec = field(default_factory=LayoutSpec)
    style: Dict[str, Any] = field(default_factory=dict)
    children: List["ComponentNode"] = field(default_factory=list)
    events: Dict[str, Any] = field(default_factory=dict)
    hidden: bool = False
    locked: bool = False
    collapsed: bool = False

    def __post_init__(self):
        if not isinstance(self.layout, LayoutSpec):
            self.layout = LayoutSpec.from_dict(self.layout)
        if not self.name:
            self.name = self.type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComponentNode":
        """Build a node (and its subtree) from a serialized mapping."""
        return cls(
            id=str(data["id"]),
            type=str(data.get("type", "Box")),
            name=str(data.get("name", "")),
            props=dict(data.get("props") or {}),
            layout=LayoutSpec.from_dict(data.get("layout")),
            style=dict(data.get("style") or {}),
            children=[cls.from_dict(child) for child in data.get("children") or []],
            events=dict(data.get("events") or {}),
            hidden=bool(data.get("hidden", False)),
            locked=bool(data.get("locked", False)),
            collapsed=bool(data.get("collapsed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node and its subtree."""
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "props": dict(self.props),
            "layout": self.layout.to_dict(),
            "style": dict(self.style),
            "events": dict(self.events),
            "children": [child.to_dict() for child in self.children],
            "locked": self.locked,
            "hidden": self.hidden,
            "collapsed": self.collapsed,
        }


def iter_nodes(root: Optional[ComponentNode]) -> Iterator[ComponentNode]:
    """Yield every node of the tree in pre-order, hidden ones included."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(root: Optional[ComponentNode], node_id: str) -> Optional[ComponentNode]:
    """Find a node by id, or None."""
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


@dataclass(frozen=True)
class ResolvedBox:
    """A rectangle of character cells, relative to the viewport origin."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def extent(self, dimension: str) -> int:
        """Return width or height by name."""
        return self.width if dimension == "width" else self.height

    def contains(self, other: "ResolvedBox") -> bool:
        """Whether other lies fully inside this box."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def inset(self, edges: Edges) -> "ResolvedBox":
        """Shrink by edges, never below zero size."""
        return ResolvedBox(
            self.x + edges.left,
            self.y + edges.top,
            max(0, self.width - edges.horizontal),
            max(0, self.height - edges.vertical),
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class LayoutWarning:
    """Base class for layout diagnostics. Subclasses set kind."""

    kind: ClassVar[str] = "warning"

    @property
    def type(self) -> str:
        return self.kind

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind}
        data.update(asdict(self))
        return data


@dataclass(frozen=True)
class OverflowWarning(LayoutWarning):
    """Content exceeded the allocated space by amount cells along axis."""

    kind: ClassVar[str] = "overflow"

    axis: str
    amount: int


@dataclass(frozen=True)
class ConstraintViolationWarning(LayoutWarning):
    """A declared constraint could not be satisfied."""

    kind: ClassVar[str] = "constraint-violation"

    constraint: str


@dataclass(frozen=True)
class NegativeSpaceWarning(LayoutWarning):
    """A size would have been negative and was clamped to zero."""

    kind: ClassVar[str] = "negative-space"

    dimension: str


@dataclass(frozen=True)
class CircularDependencyWarning(LayoutWarning):
    """
    A node's size depended on itself.

    chain lists the node ids along the sizing path, starting and ending
    with the node that was forced to 0x0.
    """

    kind: ClassVar[str] = "circular-dependency"

    chain: Tuple[str, ...] = ()


@dataclass
class LayoutDebugInfo:
    """Per-node layout result for debug overlays."""

    box: ResolvedBox
    content: ResolvedBox
    warnings: List[LayoutWarning] = field(default_factory=list)
