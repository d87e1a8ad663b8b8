#!/usr/bin/env python3
"""
Demo script for the TUI layout engine.

This script lays out and draws a few example screens, showing the
layout modes and the debug output the editor shows for broken layouts.
"""

from tuistudio import (
    ComponentNode,
    LayoutEngine,
    ScreenRenderer,
    render_overlay,
    warnings_summary,
)


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def demo_1():
    """Demo 1: Absolute positioning"""
    print_header("Demo 1: A Button at (2, 2)")

    root = ComponentNode(id="root", type="Screen", layout={"type": "absolute"}, children=[
        ComponentNode(
            id="ok", type="Button", props={"label": "OK"},
            layout={"type": "absolute", "x": 2, "y": 2},
            style={"border": True},
        ),
    ])
    print(ScreenRenderer().render(root, 30, 6))


def demo_2():
    """Demo 2: Flexbox form"""
    print_header("Demo 2: Login Form (flexbox column)")

    root = ComponentNode(
        id="screen", type="Screen", name="Login",
        layout={"type": "flexbox", "direction": "column", "gap": 1, "padding": 2},
        style={"border": True, "borderStyle": "rounded"},
        children=[
            ComponentNode(id="title", type="Text", props={"content": "Sign in to continue"}),
            ComponentNode(id="user", type="TextInput", props={"placeholder": "username"}),
            ComponentNode(id="remember", type="Checkbox", props={"label": "Remember me"}),
            ComponentNode(
                id="actions", props={"height": 3},
                layout={"type": "flexbox", "direction": "row", "gap": 2, "justify": "end"},
                children=[
                    ComponentNode(id="cancel", type="Button", props={"label": "Cancel"},
                                  style={"border": True}),
                    ComponentNode(id="login", type="Button", props={"label": "Login"},
                                  style={"border": True, "borderStyle": "double"}),
                ],
            ),
        ],
    )
    print(ScreenRenderer().render(root, 44, 16))


def demo_3():
    """Demo 3: Grid dashboard"""
    print_header("Demo 3: Dashboard (3 x 2 grid)")

    panels = [
        ComponentNode(id=f"panel{i}", style={"border": True}, layout={"padding": 1},
                      children=[ComponentNode(id=f"stat{i}", type="ProgressBar",
                                              props={"value": 15 * (i + 1), "max": 100,
                                                     "width": "100%"})])
        for i in range(6)
    ]
    root = ComponentNode(
        id="dash", type="Grid",
        layout={"type": "grid", "columns": 3, "rows": 2, "columnGap": 1, "rowGap": 0},
        children=panels,
    )
    print(ScreenRenderer().render(root, 92, 10))


def demo_4():
    """Demo 4: Layout warnings"""
    print_header("Demo 4: Debug Panel for an Overflowing Toolbar")

    root = ComponentNode(
        id="toolbar", name="Toolbar", props={"width": 30, "height": 3},
        layout={"type": "flexbox", "direction": "row", "gap": 1},
        style={"border": True},
        children=[
            ComponentNode(id=f"b{i}", type="Button", props={"label": label})
            for i, label in enumerate(["New", "Open", "Save", "Export", "Settings"])
        ],
    )
    engine = LayoutEngine()
    engine.calculate_layout(root, 40, 5)

    print(ScreenRenderer().render(root, 40, 5))
    print()
    print(warnings_summary(engine, root))
    print()
    print(render_overlay(engine, root, 40, 5))


def main():
    demo_1()
    demo_2()
    demo_3()
    demo_4()


if __name__ == "__main__":
    main()
