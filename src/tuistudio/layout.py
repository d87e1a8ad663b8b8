"""
Layout engine for TUI component trees.

Resolves every visible node of a component tree to an integer cell box,
top-down and depth-first, and records non-fatal warnings wherever the
tree asks for something the cell grid cannot give: overflow, negative
sizes, unsatisfiable constraints and sizing cycles.

Uses networkx for:
- The per-pass tree index (parent lookup by id, subtree walks)
- Pre-order traversal, which fixes the order of warning listings
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from .models import (
    HORIZONTAL,
    VERTICAL,
    CircularDependencyWarning,
    ComponentNode,
    ConstraintViolationWarning,
    Edges,
    LayoutDebugInfo,
    LayoutWarning,
    NegativeSpaceWarning,
    OverflowWarning,
    ResolvedBox,
    to_cells,
    to_number,
)
from .renderer import BorderConfig
from .sizing import intrinsic_size, is_container
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)

AXES = {"width": HORIZONTAL, "height": VERTICAL}
MIN_KEYS = {"width": "minWidth", "height": "minHeight"}
MAX_KEYS = {"width": "maxWidth", "height": "maxHeight"}

# Deepest nesting level laid out; the root is level 0
MAX_NESTING_DEPTH = 64

SizingKey = Tuple[str, str]


class CircularDependency(Exception):
    """Raised while measuring when a sizing chain re-enters a node."""

    def __init__(self, key: SizingKey, chain: Tuple[SizingKey, ...]):
        super().__init__(f"sizing cycle through {key[0]} ({key[1]})")
        self.key = key
        self.chain = chain


@dataclass
class _FlexItem:
    """A flexbox child with its margin-box extents."""

    node: ComponentNode
    main: int
    cross: int
    stretch: bool


def _is_auto(hint: Any) -> bool:
    return hint is None or (isinstance(hint, str) and hint.strip().lower() == "auto")


def _justify_offsets(justify: str, leftover: int, count: int) -> List[int]:
    """Shift of each child from its packed-at-start position."""
    if justify == "end":
        return [leftover] * count
    if justify == "center":
        return [leftover // 2] * count
    if justify == "space-between":
        if count < 2:
            return [0] * count
        return [leftover * i // (count - 1) for i in range(count)]
    if justify == "space-around":
        return [leftover * (2 * i + 1) // (2 * count) for i in range(count)]
    return [0] * count


def _split_tracks(extent: int, count: int, gap: int) -> List[int]:
    """
    Split extent into count tracks separated by gap.

    The remainder of the integer division goes one cell at a time to
    the leading tracks (10 cells / 3 tracks -> 4, 3, 3).
    """
    usable = max(0, extent - gap * (count - 1))
    base, remainder = divmod(usable, count)
    return [base + (1 if i < remainder else 0) for i in range(count)]


def _align_offset(align: str, free: int) -> int:
    if align == "center":
        return free // 2
    if align == "end":
        return free
    return 0


class _LayoutPass:
    """
    State of one calculate_layout call.

    Everything is written here first and handed to the engine only once
    the pass is complete, so readers never observe a half-built layout.
    """

    def __init__(
        self,
        root: ComponentNode,
        width: int,
        height: int,
        trace: Optional[LayoutTrace] = None,
    ):
        self.root = root
        self.viewport = ResolvedBox(0, 0, width, height)
        self.trace = trace
        self.graph = nx.DiGraph()
        self.nodes: Dict[str, ComponentNode] = {}
        self.boxes: Dict[str, ResolvedBox] = {}
        self.content: Dict[str, ResolvedBox] = {}
        self.warnings: Dict[str, List[LayoutWarning]] = {}
        self.warning_order: List[str] = []
        self._memo: Dict[Tuple[str, str, Optional[int], Optional[int]], int] = {}
        self._cyclic: Dict[str, Tuple[str, ...]] = {}
        self._cut_off: Dict[str, int] = {}
        self._index(root)

    def _index(self, root: ComponentNode) -> None:
        """
        Register visible nodes in pre-order.

        Hidden subtrees are skipped, and so are children nested below
        MAX_NESTING_DEPTH; their ancestor at the limit is remembered so the
        pass can report them.
        """
        stack: List[Tuple[Optional[str], ComponentNode, int]] = [(None, root, 0)]
        while stack:
            parent_id, node, depth = stack.pop()
            if depth > MAX_NESTING_DEPTH:
                self._cut_off[parent_id] = self._cut_off.get(parent_id, 0) + 1
                continue
            if node.id in self.nodes:
                logger.warning("Duplicate node id %r skipped by layout", node.id)
                continue
            self.nodes[node.id] = node
            if parent_id is None:
                self.graph.add_node(node.id)
            else:
                self.graph.add_edge(parent_id, node.id)
            stack.extend(
                (node.id, child, depth + 1)
                for child in reversed(node.children)
                if not child.hidden
            )

    def run(self) -> None:
        if self.trace is not None:
            self.trace.add(
                "viewport", None, width=self.viewport.width, height=self.viewport.height
            )
        self._place(self.root, self.viewport)
        for node_id, count in self._cut_off.items():
            self._warn(
                node_id,
                ConstraintViolationWarning(
                    f"nesting deeper than {MAX_NESTING_DEPTH} levels, "
                    f"{count} children not laid out"
                ),
            )

        order = nx.dfs_preorder_nodes(self.graph, self.root.id)
        self.warning_order = [node_id for node_id in order if self.warnings.get(node_id)]

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _warn(self, node_id: str, warning: LayoutWarning) -> None:
        warnings = self.warnings.setdefault(node_id, [])
        if warning in warnings:
            return
        warnings.append(warning)
        logger.debug("Layout warning on %s: %s", node_id, warning)
        if self.trace is not None:
            self.trace.add("warning", node_id, **warning.to_dict())

    def _parent(self, node_id: str) -> Optional[ComponentNode]:
        for parent_id in self.graph.predecessors(node_id):
            return self.nodes[parent_id]
        return None

    def _visible_children(self, node: ComponentNode) -> List[ComponentNode]:
        return [
            child
            for child in node.children
            if not child.hidden and self.nodes.get(child.id) is child
        ]

    @staticmethod
    def _out_of_flow(parent: ComponentNode, child: ComponentNode) -> bool:
        return parent.layout.mode == "absolute" or child.layout.mode == "absolute"

    @staticmethod
    def _chrome_edges(node: ComponentNode) -> Edges:
        """Border plus padding cells on each side."""
        padding = node.layout.padding
        border = BorderConfig.from_style(node.style)
        if border is None:
            return padding
        return Edges(
            top=padding.top + int(border.top),
            right=padding.right + int(border.right),
            bottom=padding.bottom + int(border.bottom),
            left=padding.left + int(border.left),
        )

    def _mark_cyclic(self, node: ComponentNode, chain: Tuple[SizingKey, ...]) -> None:
        ids = tuple(node_id for node_id, _ in chain)
        self._cyclic[node.id] = ids
        self._warn(node.id, CircularDependencyWarning(chain=ids))
        if self.trace is not None:
            self.trace.add("cycle", node.id, chain=" -> ".join(ids))
        box = self.boxes.get(node.id)
        if box is not None:
            self._collapse(node, box.x, box.y)

    def _collapse(self, node: ComponentNode, x: int, y: int) -> None:
        """Force node and its visible subtree to 0x0 at (x, y)."""
        empty = ResolvedBox(x, y, 0, 0)
        for node_id in nx.dfs_preorder_nodes(self.graph, node.id):
            self.boxes[node_id] = empty
            self.content[node_id] = empty

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    def _constraint(self, node: ComponentNode, dimension: str, which: str) -> Optional[int]:
        keys = MIN_KEYS if which == "min" else MAX_KEYS
        number = to_number(node.props.get(keys[dimension]))
        if number is None:
            return None
        return max(0, int(number))

    def _constrain(self, node: ComponentNode, dimension: str, value: int) -> int:
        minimum = self._constraint(node, dimension, "min")
        maximum = self._constraint(node, dimension, "max")
        if minimum is not None and maximum is not None and minimum > maximum:
            self._warn(
                node.id,
                ConstraintViolationWarning(
                    f"{MIN_KEYS[dimension]} {minimum} > {MAX_KEYS[dimension]} {maximum}"
                ),
            )
        if maximum is not None:
            value = min(value, maximum)
        # min wins over max, as in CSS
        if minimum is not None:
            value = max(value, minimum)
        return value

    def _measure(
        self,
        node: ComponentNode,
        dimension: str,
        basis: Optional[int],
        fill: Optional[int],
        chain: Tuple[SizingKey, ...],
    ) -> int:
        """
        Border-box extent of node along dimension.

        Args:
            basis: Parent content extent percentages refer to, or None when
                it is not known yet and must itself be measured.
            fill: Extent an auto-sized container fills, or None to make it
                shrink-wrap its children.
            chain: Sizing keys currently being measured, outermost first.

        Raises:
            CircularDependency: If the chain re-enters a key. The frame that
                owns the re-entered key catches it and marks the node cyclic.
        """
        if node.id in self._cyclic:
            return 0
        key = (node.id, dimension)
        if key in chain:
            raise CircularDependency(key, chain[chain.index(key):] + (key,))

        memo_key = (node.id, dimension, basis, fill)
        if memo_key in self._memo:
            return self._memo[memo_key]

        try:
            value = self._declared_extent(node, dimension, basis, fill, chain + (key,))
        except CircularDependency as exc:
            if exc.key != key:
                raise
            self._mark_cyclic(node, exc.chain)
            return 0

        value = self._constrain(node, dimension, value)
        self._memo[memo_key] = value
        return value

    def _declared_extent(
        self,
        node: ComponentNode,
        dimension: str,
        basis: Optional[int],
        fill: Optional[int],
        chain: Tuple[SizingKey, ...],
    ) -> int:
        hint = node.props.get(dimension)
        number = to_number(hint)
        if number is not None:
            return int(number)

        chrome = self._chrome_edges(node).along(dimension)
        if isinstance(hint, str):
            text = hint.strip()
            if text.endswith("%"):
                percent = to_number(text[:-1])
                if percent is not None:
                    if basis is None:
                        basis = self._parent_content_extent(node, dimension, chain)
                    return int(max(0, basis) * percent / 100)
            elif text.lower() == "fit" and is_container(node):
                return self._children_extent(node, dimension, chain) + chrome
            elif text.startswith("@"):
                target = self.nodes.get(text[1:])
                if target is not None:
                    return self._planned_extent(target, dimension, chain)

        if is_container(node):
            if fill is not None:
                return fill
            return self._children_extent(node, dimension, chain) + chrome

        width, height = intrinsic_size(node)
        return (width if dimension == "width" else height) + chrome

    def _parent_content_extent(
        self, node: ComponentNode, dimension: str, chain: Tuple[SizingKey, ...]
    ) -> int:
        parent = self._parent(node.id)
        if parent is None:
            return self.viewport.extent(dimension)
        if parent.id in self.content:
            return self.content[parent.id].extent(dimension)
        extent = self._planned_extent(parent, dimension, chain)
        return max(0, extent - self._chrome_edges(parent).along(dimension))

    def _planned_extent(
        self, node: ComponentNode, dimension: str, chain: Tuple[SizingKey, ...]
    ) -> int:
        """
        Extent node is placed with, worked out ahead of its placement.

        Follows what the root, positioned, grid and flexbox placements give
        the node, so a reference reads the same extent whether its target
        comes before or after it in the tree.
        """
        box = self.boxes.get(node.id)
        if box is not None:
            return box.extent(dimension)

        margin = node.layout.margin.along(dimension)
        auto = _is_auto(node.props.get(dimension))
        fills = auto and is_container(node)
        parent = self._parent(node.id)
        if parent is None:
            outer = max(0, self.viewport.extent(dimension) - margin)
            return min(max(0, self._measure(node, dimension, outer, outer, chain)), outer)

        spec = parent.layout
        if self._out_of_flow(parent, node):
            fill = None
            if fills:
                offset = node.layout.x if dimension == "width" else node.layout.y
                available = self._parent_content_extent(node, dimension, chain)
                fill = max(0, available - offset - margin)
            return max(0, self._measure(node, dimension, None, fill, chain))

        if spec.mode == "grid":
            flow = [
                child
                for child in self._visible_children(parent)
                if not self._out_of_flow(parent, child)
            ]
            index = flow.index(node)
            placed = index < spec.columns * spec.rows
            if placed and (fills or parent.id in self.content):
                available = self._parent_content_extent(node, dimension, chain)
                if dimension == "width":
                    tracks = _split_tracks(available, spec.columns, spec.column_gap)
                    track = tracks[index % spec.columns]
                else:
                    tracks = _split_tracks(available, spec.rows, spec.row_gap)
                    track = tracks[index // spec.columns]
                cell = max(0, track - margin)
                return min(max(0, self._measure(node, dimension, cell, cell, chain)), cell)
        elif spec.mode == "flexbox" and spec.align == "stretch" and not spec.wrap:
            cross = "height" if spec.direction == "row" else "width"
            if dimension == cross and auto:
                return max(0, self._parent_content_extent(node, dimension, chain) - margin)

        return max(0, self._measure(node, dimension, None, None, chain))

    def _children_extent(
        self, node: ComponentNode, dimension: str, chain: Tuple[SizingKey, ...]
    ) -> int:
        """Extent needed to hold the children without clipping."""
        spec = node.layout
        children = self._visible_children(node)

        def outer(child: ComponentNode) -> int:
            size = max(0, self._measure(child, dimension, None, None, chain))
            return size + child.layout.margin.along(dimension)

        flow = [child for child in children if not self._out_of_flow(node, child)]
        extent = 0
        if flow:
            if spec.mode == "grid":
                tracks = spec.columns if dimension == "width" else spec.rows
                gap = spec.column_gap if dimension == "width" else spec.row_gap
                sizes = [outer(child) for child in flow[: spec.columns * spec.rows]]
                extent = tracks * max(sizes) + gap * (tracks - 1)
            else:
                flexbox = spec.mode == "flexbox"
                direction = spec.direction if flexbox else "column"
                gap = spec.gap if flexbox else 0
                main = "width" if direction == "row" else "height"
                sizes = [outer(child) for child in flow]
                if dimension == main:
                    extent = sum(sizes) + gap * (len(sizes) - 1)
                else:
                    extent = max(sizes)

        for child in children:
            if self._out_of_flow(node, child):
                offset = child.layout.x if dimension == "width" else child.layout.y
                extent = max(extent, offset + outer(child))
        return extent

    def _resolve(
        self,
        node: ComponentNode,
        dimension: str,
        basis: Optional[int],
        fill: Optional[int],
    ) -> int:
        """Requested extent of node, clamped at zero."""
        value = self._measure(node, dimension, basis, fill, ())
        if node.id in self._cyclic:
            return 0
        if value < 0:
            self._warn(node.id, NegativeSpaceWarning(dimension))
            return 0
        return value

    def _fit(
        self, node: ComponentNode, dimension: str, value: int, available: int
    ) -> Tuple[int, bool]:
        """Clamp value to available, warning when it had to be clipped."""
        if value <= available:
            return value, False
        minimum = self._constraint(node, dimension, "min")
        if minimum is not None and minimum > available:
            self._warn(
                node.id,
                ConstraintViolationWarning(
                    f"{MIN_KEYS[dimension]} {minimum} exceeds available {available}"
                ),
            )
        else:
            self._warn(node.id, OverflowWarning(AXES[dimension], value - available))
        return available, True

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _place(
        self,
        node: ComponentNode,
        region: ResolvedBox,
        sized: bool = False,
        clipped: bool = False,
    ) -> None:
        """
        Give node its box inside region, then arrange its children.

        Args:
            region: Allocated margin box. When sized is True the parent has
                already decided the size and the region is used as-is;
                otherwise the node resolves its own size within it.
            clipped: The parent cut the node short, so its own shortfall
                inside is not reported again.
        """
        if node.id in self._cyclic:
            self._collapse(node, region.x, region.y)
            return

        outer = region.inset(node.layout.margin)
        if sized:
            width, height = outer.width, outer.height
        else:
            width = self._resolve(node, "width", outer.width, outer.width)
            height = self._resolve(node, "height", outer.height, outer.height)
            if node.id in self._cyclic:
                self._collapse(node, outer.x, outer.y)
                return
            width, clipped_width = self._fit(node, "width", width, outer.width)
            height, clipped_height = self._fit(node, "height", height, outer.height)
            clipped = clipped or clipped_width or clipped_height

        box = ResolvedBox(outer.x, outer.y, width, height)
        chrome = self._chrome_edges(node)
        if not clipped:
            if width < chrome.horizontal:
                self._warn(node.id, NegativeSpaceWarning("width"))
            if height < chrome.vertical:
                self._warn(node.id, NegativeSpaceWarning("height"))
        content = box.inset(chrome)

        self.boxes[node.id] = box
        self.content[node.id] = content
        if self.trace is not None:
            self.trace.add("place", node.id, box=box.to_dict(), content=content.to_dict())

        self._arrange(node, content)

    def _arrange(self, node: ComponentNode, content: ResolvedBox) -> None:
        children = self._visible_children(node)
        if not children:
            return

        spec = node.layout
        flow = [child for child in children if not self._out_of_flow(node, child)]
        if flow:
            if spec.mode == "grid":
                self._arrange_grid(node, content, flow)
            elif spec.mode == "flexbox":
                self._arrange_flex(
                    node, content, flow, spec.direction, spec.justify,
                    spec.align, spec.gap, spec.wrap,
                )
            else:
                # Normal flow: a plain top-to-bottom stack
                self._arrange_flex(node, content, flow, "column", "start", "start", 0, False)

        for child in children:
            if self._out_of_flow(node, child):
                self._place_positioned(child, content)

    def _place_positioned(self, child: ComponentNode, content: ResolvedBox) -> None:
        """Place a child at its literal x, y from the content origin."""
        spec = child.layout
        margin = spec.margin
        width = self._resolve(
            child, "width", content.width,
            max(0, content.width - spec.x - margin.horizontal),
        )
        height = self._resolve(
            child, "height", content.height,
            max(0, content.height - spec.y - margin.vertical),
        )
        region = ResolvedBox(
            content.x + spec.x,
            content.y + spec.y,
            width + margin.horizontal,
            height + margin.vertical,
        )
        self._place(child, region, sized=True)

    def _arrange_flex(
        self,
        node: ComponentNode,
        content: ResolvedBox,
        children: List[ComponentNode],
        direction: str,
        justify: str,
        align: str,
        gap: int,
        wrap: bool,
    ) -> None:
        row = direction == "row"
        main_dim, cross_dim = ("width", "height") if row else ("height", "width")
        main_size = content.extent(main_dim)
        cross_size = content.extent(cross_dim)

        items = []
        for child in children:
            margin = child.layout.margin
            main = self._resolve(child, main_dim, main_size, None)
            cross = self._resolve(child, cross_dim, cross_size, None)
            stretch = align == "stretch" and _is_auto(child.props.get(cross_dim))
            items.append(
                _FlexItem(
                    child,
                    main + margin.along(main_dim),
                    cross + margin.along(cross_dim),
                    stretch,
                )
            )

        if wrap:
            lines = self._flex_lines(items, main_size, gap)
            thicknesses = [max(item.cross for item in line) for line in lines]
        else:
            lines = [items]
            thicknesses = [cross_size]

        main_excess = 0
        cross_excess = max(0, sum(thicknesses) + gap * (len(lines) - 1) - cross_size)

        line_start = 0
        for line, thickness in zip(lines, thicknesses):
            demand = sum(item.main for item in line) + gap * (len(line) - 1)
            leftover = main_size - demand
            if leftover < 0:
                main_excess = max(main_excess, -leftover)
            offsets = _justify_offsets(justify, max(0, leftover), len(line))
            if self.trace is not None:
                self.trace.add(
                    "flex-line", node.id,
                    children=[item.node.id for item in line],
                    demand=demand, available=main_size, cross_start=line_start,
                    thickness=thickness,
                )

            cursor = 0
            for item, offset in zip(line, offsets):
                main_start = min(cursor + offset, main_size)
                main_len = max(0, min(item.main, main_size - main_start))
                cursor += item.main + gap

                wanted_cross = thickness if item.stretch else item.cross
                if wanted_cross > thickness:
                    cross_excess = max(cross_excess, wanted_cross - thickness)
                    cross_offset = 0
                else:
                    cross_offset = _align_offset(align, thickness - wanted_cross)
                cross_start = min(line_start + cross_offset, cross_size)
                cross_len = max(0, min(wanted_cross, thickness, cross_size - cross_start))

                if row:
                    region = ResolvedBox(
                        content.x + main_start, content.y + cross_start, main_len, cross_len
                    )
                else:
                    region = ResolvedBox(
                        content.x + cross_start, content.y + main_start, cross_len, main_len
                    )
                clipped = main_len < item.main or cross_len < wanted_cross
                self._place(item.node, region, sized=True, clipped=clipped)

            line_start += thickness + gap

        if main_excess:
            self._warn(node.id, OverflowWarning(AXES[main_dim], main_excess))
        if cross_excess:
            self._warn(node.id, OverflowWarning(AXES[cross_dim], cross_excess))

    @staticmethod
    def _flex_lines(items: List[_FlexItem], main_size: int, gap: int) -> List[List[_FlexItem]]:
        """Break items into lines that each fit main_size where possible."""
        lines: List[List[_FlexItem]] = []
        current: List[_FlexItem] = []
        used = 0
        for item in items:
            needed = item.main + (gap if current else 0)
            if current and used + needed > main_size:
                lines.append(current)
                current, used = [item], item.main
            else:
                current.append(item)
                used += needed
        if current:
            lines.append(current)
        return lines

    def _tracks(
        self, node: ComponentNode, extent: int, count: int, gap: int, dimension: str
    ) -> List[int]:
        """Grid tracks of node, warning when the gaps alone overfill extent."""
        if extent - gap * (count - 1) < 0:
            self._warn(node.id, NegativeSpaceWarning(dimension))
        return _split_tracks(extent, count, gap)

    def _arrange_grid(
        self, node: ComponentNode, content: ResolvedBox, children: List[ComponentNode]
    ) -> None:
        spec = node.layout
        widths = self._tracks(node, content.width, spec.columns, spec.column_gap, "width")
        heights = self._tracks(node, content.height, spec.rows, spec.row_gap, "height")
        if self.trace is not None:
            self.trace.add("grid-tracks", node.id, columns=widths, rows=heights)

        capacity = spec.columns * spec.rows
        for index, child in enumerate(children[:capacity]):
            row, column = divmod(index, spec.columns)
            cell = ResolvedBox(
                content.x + sum(widths[:column]) + spec.column_gap * column,
                content.y + sum(heights[:row]) + spec.row_gap * row,
                widths[column],
                heights[row],
            )
            self._place(child, cell)

        unplaced = len(children) - capacity
        if unplaced > 0:
            self._warn(
                node.id,
                ConstraintViolationWarning(
                    f"grid {spec.columns}x{spec.rows} holds {capacity} children, "
                    f"{unplaced} not placed"
                ),
            )


class LayoutEngine:
    """
    Resolves component trees to cell boxes and keeps the last result.

    The result of the most recent calculate_layout call stays queryable by
    node id until the next call replaces it as a whole.

    Example:
        >>> engine = LayoutEngine()
        >>> engine.calculate_layout(root, 80, 24)
        >>> engine.get_layout("ok-button")
        ResolvedBox(x=2, y=2, width=6, height=3)
        >>> engine.get_nodes_with_warnings()
        []
    """

    def __init__(self, trace: bool = False):
        """
        Initialize the layout engine.

        Args:
            trace: Record every placement decision in a LayoutTrace
        """
        self.trace_enabled = trace
        self._boxes: Dict[str, ResolvedBox] = {}
        self._content: Dict[str, ResolvedBox] = {}
        self._warnings: Dict[str, List[LayoutWarning]] = {}
        self._warning_order: List[str] = []
        self._trace: Optional[LayoutTrace] = None

    def calculate_layout(
        self,
        root: Optional[ComponentNode],
        viewport_width: Any,
        viewport_height: Any,
    ) -> None:
        """
        Lay out root within a viewport of the given columns and rows.

        A None (or hidden) root clears the layout. Negative or fractional
        viewport sizes are normalized to whole non-negative cells.
        """
        width = to_cells(viewport_width)
        height = to_cells(viewport_height)
        trace = LayoutTrace(viewport=(width, height)) if self.trace_enabled else None

        if root is None or root.hidden:
            self._commit({}, {}, {}, [], trace)
            logger.debug("Layout cleared (no visible root)")
            return

        layout_pass = _LayoutPass(root, width, height, trace)
        layout_pass.run()
        self._commit(
            layout_pass.boxes,
            layout_pass.content,
            layout_pass.warnings,
            layout_pass.warning_order,
            trace,
        )
        logger.debug(
            "Laid out %d nodes in %dx%d, %d with warnings",
            len(layout_pass.boxes), width, height, len(layout_pass.warning_order),
        )

    def _commit(
        self,
        boxes: Dict[str, ResolvedBox],
        content: Dict[str, ResolvedBox],
        warnings: Dict[str, List[LayoutWarning]],
        warning_order: List[str],
        trace: Optional[LayoutTrace],
    ) -> None:
        self._boxes = boxes
        self._content = content
        self._warnings = warnings
        self._warning_order = warning_order
        self._trace = trace

    def get_layout(self, node_id: str) -> Optional[ResolvedBox]:
        """Get the resolved box of a node, or None if it was not laid out."""
        return self._boxes.get(node_id)

    def get_content_box(self, node_id: str) -> Optional[ResolvedBox]:
        """Get the region inside a node's border and padding."""
        return self._content.get(node_id)

    def get_debug_info(self, node_id: str) -> Optional[LayoutDebugInfo]:
        """Get box, content region and warnings of a laid-out node."""
        box = self._boxes.get(node_id)
        if box is None:
            return None
        return LayoutDebugInfo(
            box=box,
            content=self._content.get(node_id, box),
            warnings=list(self._warnings.get(node_id, [])),
        )

    def get_nodes_with_warnings(self) -> List[str]:
        """Ids of nodes carrying warnings, in tree pre-order."""
        return list(self._warning_order)

    def get_all_layouts(self) -> Dict[str, ResolvedBox]:
        """Get a copy of every resolved box, keyed by node id."""
        return dict(self._boxes)

    def get_trace(self) -> Optional[LayoutTrace]:
        """Get the trace of the last pass (only when tracing is enabled)."""
        return self._trace

    def clear(self) -> None:
        """Drop the current layout."""
        self._commit({}, {}, {}, [], None)
