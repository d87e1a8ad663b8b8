"""
Intrinsic sizing table for TUI widgets.

A widget's intrinsic size is the size of the text it draws when nothing
else is declared. The table below is the single source of that policy:
the layout engine measures with it and the screen renderer draws the very
same lines, so a widget's box always fits what ends up on screen.

Sizes returned here are content sizes; the engine adds border and
padding cells on top.
"""

from typing import Any, Callable, Dict, List, Tuple

from .models import ComponentNode, to_number

CONTAINER_TYPES = frozenset(
    {"Screen", "Box", "Grid", "Tabs", "Modal", "Popover", "Panel", "Form"}
)

PROGRESS_BAR_CELLS = 20
LIST_VISIBLE_ITEMS = 5
DEFAULT_PLACEHOLDER = "_" * 11


def is_container(node: ComponentNode) -> bool:
    """Whether node is a container type (fills its region when auto-sized)."""
    return node.type in CONTAINER_TYPES


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _items(node: ComponentNode) -> List[str]:
    items = node.props.get("items") or []
    if not isinstance(items, (list, tuple)):
        return []
    return [str(item) for item in items]


def _button(node: ComponentNode) -> List[str]:
    props = node.props
    label = _text(props.get("label"), "Button")
    icon_left = str(props["iconLeft"]) if props.get("iconLeftEnabled") and props.get("iconLeft") else ""
    icon_right = str(props["iconRight"]) if props.get("iconRightEnabled") and props.get("iconRight") else ""
    number = props.get("number")

    if props.get("separated") and icon_left:
        left_section = f"{icon_left} {number}" if number is not None else icon_left
        right = f" {icon_right}" if icon_right else ""
        return [f"{left_section} │ {label}{right}"]

    left = f"{icon_left} " if icon_left else ""
    right = f" {icon_right}" if icon_right else ""
    # One cell of breathing room on each side of the label
    return [f" {left}{label}{right} "]


def _text_block(node: ComponentNode) -> List[str]:
    content = node.props.get("content", node.props.get("text"))
    return _text(content, "Text").split("\n")


def _text_input(node: ComponentNode) -> List[str]:
    return [f"[{_text(node.props.get('placeholder'), DEFAULT_PLACEHOLDER)}]"]


def _number_text(value: float) -> str:
    """Whole numbers without a decimal point, fractions as given."""
    return str(int(value)) if value.is_integer() else str(value)


def _progress_bar(node: ComponentNode) -> List[str]:
    value = to_number(node.props.get("value")) or 0.0
    maximum = to_number(node.props.get("max")) or 100.0
    filled = int(value / maximum * PROGRESS_BAR_CELLS)
    filled = max(0, min(PROGRESS_BAR_CELLS, filled))
    bar = "█" * filled + "░" * (PROGRESS_BAR_CELLS - filled)
    return [f"[{bar}] {_number_text(value)}/{_number_text(maximum)}"]


def _checkbox(node: ComponentNode) -> List[str]:
    mark = "✓" if node.props.get("checked") else " "
    return [f"[{mark}] {_text(node.props.get('label'), 'Checkbox')}"]


def _radio(node: ComponentNode) -> List[str]:
    mark = "•" if node.props.get("checked") else " "
    return [f"({mark}) {_text(node.props.get('label'), 'Radio')}"]


def _toggle(node: ComponentNode) -> List[str]:
    state = "ON" if node.props.get("checked", node.props.get("on")) else "OFF"
    return [f"[{state}] {_text(node.props.get('label'), 'Toggle')}"]


def _spinner(node: ComponentNode) -> List[str]:
    return [f"⣾ {_text(node.props.get('label'), 'Loading...')}"]


def _list(node: ComponentNode) -> List[str]:
    items = _items(node)
    lines = [f"• {item}" for item in items[:LIST_VISIBLE_ITEMS]]
    if len(items) > LIST_VISIBLE_ITEMS:
        lines.append(f"... +{len(items) - LIST_VISIBLE_ITEMS} more")
    return lines or [""]


def _breadcrumb(node: ComponentNode) -> List[str]:
    return [" > ".join(_items(node))]


def _table(node: ComponentNode) -> List[str]:
    columns = [str(c) for c in node.props.get("columns") or []]
    rows = [
        [str(cell) for cell in row]
        for row in node.props.get("rows") or []
        if isinstance(row, (list, tuple))
    ]
    table = ([columns] if columns else []) + rows
    if not table:
        return [""]

    count = max(len(row) for row in table)
    widths = [0] * count
    for row in table:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in table:
        cells = [
            (row[i] if i < len(row) else "").ljust(widths[i]) for i in range(count)
        ]
        lines.append(" │ ".join(cells).rstrip())
    return lines


def _spacer(node: ComponentNode) -> List[str]:
    return []


CONTENT_BUILDERS: Dict[str, Callable[[ComponentNode], List[str]]] = {
    "Button": _button,
    "Text": _text_block,
    "Tooltip": _text_block,
    "TextInput": _text_input,
    "ProgressBar": _progress_bar,
    "Checkbox": _checkbox,
    "Radio": _radio,
    "Toggle": _toggle,
    "Spinner": _spinner,
    "List": _list,
    "Select": _list,
    "Menu": _list,
    "Tree": _list,
    "Breadcrumb": _breadcrumb,
    "Table": _table,
    "Spacer": _spacer,
}


def content_lines(node: ComponentNode) -> List[str]:
    """
    Text lines a widget draws inside its box.

    Containers draw no text of their own; unknown leaf types draw their
    type name.
    """
    if is_container(node):
        return []
    builder = CONTENT_BUILDERS.get(node.type)
    if builder is None:
        return [node.type]
    return builder(node)


def intrinsic_size(node: ComponentNode) -> Tuple[int, int]:
    """Content (width, height) of a leaf widget, excluding border and padding."""
    lines = content_lines(node)
    if not lines:
        return 0, 0
    return max(len(line) for line in lines), len(lines)
