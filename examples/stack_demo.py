#!/usr/bin/env python3
"""
Stack Layout Example
Builds a swimlane with a vertical list and a horizontal toolbar, lays both
out, then drags a list item to the end of its stack.
"""

from stacklayout import Geometry, GraphDocument, LayoutManager
from stacklayout.config.settings import configure_logging


def show(doc, parent):
    for cell in doc.get_children(parent):
        geo = doc.get_geometry(cell)
        print(f"   {cell:>8}: x={geo.x:g} y={geo.y:g} w={geo.width:g} h={geo.height:g}")


def create_stack_demo():
    """Create and lay out a small stacked diagram."""
    print("Creating Stack Layout Example...")
    print("=" * 50)

    doc = GraphDocument()
    layer = doc.add_layer()

    # 1. Containers
    print("\n1. Adding containers")
    doc.insert(
        layer,
        "lane",
        Geometry(x=20, y=20, width=240, height=300),
        style={"shape": "swimlane", "startSize": "30", "childLayout": "stackLayout",
               "horizontalStack": "0", "stackSpacing": "10", "resizeParent": "1"},
    )
    doc.insert(
        "lane",
        "items",
        Geometry(width=240, height=100),
        style={"childLayout": "stackLayout", "stackPreset": "list", "stackSpacing": "2"},
    )
    doc.insert(
        "lane",
        "toolbar",
        Geometry(width=240, height=24),
        style={"childLayout": "stackLayout", "stackPreset": "toolbar"},
    )

    # 2. Children
    print("2. Adding children")
    for i, height in enumerate([20, 30, 25]):
        doc.insert("items", f"item{i}", Geometry(width=80, height=height))
    for i in range(3):
        doc.insert("toolbar", f"button{i}", Geometry(width=24, height=24))

    # 3. Layout
    print("\n3. Running layouts")
    manager = LayoutManager(doc)
    executed = manager.execute_layouts(["item0", "button0"])
    print(f"   Laid out: {', '.join(executed)}")
    show(doc, "lane")
    show(doc, "items")
    show(doc, "toolbar")

    # 4. Drag item0 below the last item
    print("\n4. Dragging item0 to the bottom of the list")
    x, y = doc.get_state_origin("item2")
    manager.cells_moved(["item0"], x=x, y=y + 30)
    manager.execute_layouts(["item0"])
    print(f"   Order: {doc.get_children('items')}")
    show(doc, "items")

    print("\n" + "=" * 50)
    print("✅ Stack layout example completed!")


if __name__ == "__main__":
    configure_logging()
    create_stack_demo()
