"""Pytest configuration and shared fixtures for tuistudio tests."""

import json

import pytest

from tuistudio import ComponentNode, LayoutEngine, ScreenRenderer


@pytest.fixture
def engine():
    """Default LayoutEngine instance."""
    return LayoutEngine()


@pytest.fixture
def traced_engine():
    """LayoutEngine with tracing enabled."""
    return LayoutEngine(trace=True)


@pytest.fixture
def screen_renderer():
    """Default ScreenRenderer instance."""
    return ScreenRenderer()


@pytest.fixture
def button_screen():
    """Absolute root holding a bordered OK button at (2, 2)."""
    button = ComponentNode(
        id="ok",
        type="Button",
        props={"label": "OK"},
        layout={"type": "absolute", "x": 2, "y": 2},
        style={"border": True, "borderStyle": "single"},
    )
    return ComponentNode(
        id="root", type="Screen", layout={"type": "absolute"}, children=[button]
    )


@pytest.fixture
def overflowing_row():
    """Flexbox row of content width 10 holding two 8-wide children."""
    return ComponentNode(
        id="row",
        type="Box",
        props={"width": 10, "height": 3},
        layout={"type": "flexbox", "direction": "row"},
        children=[
            ComponentNode(id="first", props={"width": 8}),
            ComponentNode(id="second", props={"width": 8}),
        ],
    )


@pytest.fixture
def three_column_grid():
    """Grid of 3 columns and 2 rows over a 10x4 content region."""
    return ComponentNode(
        id="grid",
        type="Grid",
        props={"width": 10, "height": 4},
        layout={"type": "grid", "columns": 3, "rows": 2},
        children=[ComponentNode(id=f"cell{i}") for i in range(6)],
    )


@pytest.fixture
def login_tree():
    """A small login form: bordered column with a title, input and buttons."""
    return ComponentNode(
        id="screen",
        type="Screen",
        name="Login Screen",
        layout={"type": "flexbox", "direction": "column", "gap": 1, "padding": 2},
        style={"border": True, "borderStyle": "single"},
        children=[
            ComponentNode(id="title", type="Text", props={"content": "Sign in"}),
            ComponentNode(id="user", type="TextInput", props={"placeholder": "username"}),
            ComponentNode(
                id="actions",
                type="Box",
                props={"height": 3},
                layout={"type": "flexbox", "direction": "row", "gap": 2},
                children=[
                    ComponentNode(
                        id="submit",
                        type="Button",
                        props={"label": "Login"},
                        style={"border": True},
                    ),
                    ComponentNode(
                        id="cancel",
                        type="Button",
                        props={"label": "Cancel"},
                        style={"border": True, "borderStyle": "rounded"},
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def login_document_text(login_tree):
    """Serialized .tui document for the login tree."""
    return json.dumps(
        {
            "version": "1",
            "meta": {
                "name": "Login Screen",
                "theme": "dracula",
                "savedAt": "2026-01-01T00:00:00+00:00",
            },
            "tree": login_tree.to_dict(),
        }
    )
