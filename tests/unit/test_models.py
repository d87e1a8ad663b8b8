"""Unit tests for models module."""

from tuistudio.models import (
    CircularDependencyWarning,
    ComponentNode,
    Edges,
    LayoutSpec,
    OverflowWarning,
    ResolvedBox,
    find_node,
    iter_nodes,
    to_cells,
    to_number,
)


class TestNumbers:
    """Tests for numeric normalization helpers."""

    def test_to_number_accepts_numeric_strings(self):
        """Test that numeric strings are read as numbers."""
        assert to_number("12") == 12.0
        assert to_number(" 3.5 ") == 3.5

    def test_to_number_rejects_non_numbers(self):
        """Test that booleans, text and NaN are not numbers."""
        assert to_number(True) is None
        assert to_number("auto") is None
        assert to_number(float("nan")) is None
        assert to_number(None) is None

    def test_to_cells_truncates(self):
        """Test that fractions are truncated, never rounded up."""
        assert to_cells(9.9) == 9
        assert to_cells("4.5") == 4

    def test_to_cells_clamps_negative(self):
        """Test that negative values become zero."""
        assert to_cells(-3) == 0

    def test_to_cells_default(self):
        """Test the default for non-numeric values."""
        assert to_cells("wide", default=7) == 7


class TestEdges:
    """Tests for Edges dataclass."""

    def test_uniform(self):
        """Test a single number applies to every side."""
        edges = Edges.from_value(2)
        assert edges == Edges(2, 2, 2, 2)
        assert edges.horizontal == 4
        assert edges.vertical == 4

    def test_four_sided(self):
        """Test a top/right/bottom/left mapping."""
        edges = Edges.from_value({"top": 1, "right": 2, "bottom": 3, "left": 4})
        assert edges.horizontal == 6
        assert edges.vertical == 4
        assert edges.along("width") == 6
        assert edges.along("height") == 4

    def test_malformed_values_are_zero(self):
        """Test that negative and missing sides clamp to zero."""
        edges = Edges.from_value({"top": -5, "left": "x"})
        assert edges == Edges()

    def test_to_value(self):
        """Test serialization back to a number or mapping."""
        assert Edges(1, 1, 1, 1).to_value() == 1
        assert Edges(1, 0, 0, 0).to_value() == {
            "top": 1,
            "right": 0,
            "bottom": 0,
            "left": 0,
        }


class TestLayoutSpec:
    """Tests for LayoutSpec parsing."""

    def test_defaults(self):
        """Test default values."""
        spec = LayoutSpec()
        assert spec.mode == "none"
        assert spec.direction == "row"
        assert spec.justify == "start"
        assert spec.align == "start"
        assert spec.columns == 2
        assert spec.rows == 2

    def test_from_editor_mapping(self):
        """Test the editor's camelCase keys."""
        spec = LayoutSpec.from_dict(
            {"type": "grid", "columns": 3, "rows": 1, "columnGap": 1, "rowGap": 2}
        )
        assert spec.mode == "grid"
        assert spec.columns == 3
        assert spec.column_gap == 1
        assert spec.row_gap == 2

    def test_unknown_values_fall_back(self):
        """Test that unknown tags normalize to defaults."""
        spec = LayoutSpec.from_dict(
            {"type": "masonry", "direction": "diagonal", "justify": "evenly"}
        )
        assert spec.mode == "none"
        assert spec.direction == "row"
        assert spec.justify == "start"

    def test_zero_tracks_use_default(self):
        """Test that a grid of zero columns gets the default track count."""
        spec = LayoutSpec.from_dict({"type": "grid", "columns": 0})
        assert spec.columns == 2

    def test_negative_offsets_clamp(self):
        """Test that negative x, y and gap clamp to zero."""
        spec = LayoutSpec.from_dict({"type": "absolute", "x": -4, "y": 2.7, "gap": -1})
        assert spec.x == 0
        assert spec.y == 2
        assert spec.gap == 0

    def test_round_trip(self):
        """Test to_dict output parses back to an equal spec."""
        spec = LayoutSpec.from_dict(
            {"type": "flexbox", "direction": "column", "gap": 1, "padding": 2}
        )
        assert LayoutSpec.from_dict(spec.to_dict()) == spec


class TestComponentNode:
    """Tests for ComponentNode dataclass."""

    def test_layout_mapping_is_converted(self):
        """Test that a plain layout mapping becomes a LayoutSpec."""
        node = ComponentNode(id="a", layout={"type": "flexbox"})
        assert isinstance(node.layout, LayoutSpec)
        assert node.layout.mode == "flexbox"

    def test_name_defaults_to_type(self):
        """Test that the display name defaults to the widget type."""
        assert ComponentNode(id="a", type="Button").name == "Button"

    def test_from_dict_builds_subtree(self):
        """Test building a tree from serialized data."""
        node = ComponentNode.from_dict(
            {
                "id": "root",
                "type": "Screen",
                "children": [{"id": "child", "type": "Text", "hidden": True}],
            }
        )
        assert node.children[0].id == "child"
        assert node.children[0].hidden is True

    def test_to_dict_round_trip(self):
        """Test that serialization preserves the tree."""
        node = ComponentNode(
            id="root",
            type="Box",
            props={"width": 10},
            style={"border": True},
            children=[ComponentNode(id="leaf", type="Text")],
        )
        assert ComponentNode.from_dict(node.to_dict()) == node


class TestTreeHelpers:
    """Tests for iter_nodes and find_node."""

    def test_pre_order(self):
        """Test that nodes are yielded parents first, in child order."""
        root = ComponentNode(
            id="r",
            children=[
                ComponentNode(id="a", children=[ComponentNode(id="a1")]),
                ComponentNode(id="b"),
            ],
        )
        assert [n.id for n in iter_nodes(root)] == ["r", "a", "a1", "b"]

    def test_find_node(self):
        """Test lookup by id."""
        root = ComponentNode(id="r", children=[ComponentNode(id="a")])
        assert find_node(root, "a").id == "a"
        assert find_node(root, "missing") is None
        assert find_node(None, "a") is None


class TestResolvedBox:
    """Tests for ResolvedBox geometry."""

    def test_edges(self):
        """Test right and bottom."""
        box = ResolvedBox(2, 3, 10, 4)
        assert box.right == 12
        assert box.bottom == 7

    def test_contains(self):
        """Test containment."""
        outer = ResolvedBox(0, 0, 10, 10)
        assert outer.contains(ResolvedBox(2, 2, 8, 8))
        assert not outer.contains(ResolvedBox(2, 2, 9, 8))

    def test_inset_never_negative(self):
        """Test that insetting past the size leaves zero."""
        box = ResolvedBox(0, 0, 3, 3).inset(Edges(2, 2, 2, 2))
        assert box == ResolvedBox(2, 2, 0, 0)


class TestWarnings:
    """Tests for warning records."""

    def test_type_tags(self):
        """Test the type tag of each warning kind."""
        assert OverflowWarning("horizontal", 6).type == "overflow"
        assert CircularDependencyWarning(("a", "a")).type == "circular-dependency"

    def test_to_dict(self):
        """Test warning serialization."""
        assert OverflowWarning("vertical", 2).to_dict() == {
            "type": "overflow",
            "axis": "vertical",
            "amount": 2,
        }

    def test_equality(self):
        """Test that warnings compare by value."""
        assert OverflowWarning("horizontal", 1) == OverflowWarning("horizontal", 1)
