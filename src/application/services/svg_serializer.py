"""
Application service: VectorScene → SVG markup.

The markup is what the rasterizer port consumes. Only attributes that are
set on a node are emitted, so equal scenes serialize to identical text.
"""

import xml.etree.ElementTree as ET

from src.application.services.curve_basis import fmt
from src.domain.entities.scene import Group, Line, Node, Path, Rect, Text, VectorScene

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _set(element: ET.Element, name: str, value) -> None:
    if value is None:
        return
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = fmt(value)
    element.set(name, str(value))


def _build(parent: ET.Element, node: Node) -> None:
    if isinstance(node, Group):
        element = ET.SubElement(parent, "g")
        _set(element, "class", node.css_class)
        _set(element, "transform", node.transform)
        for child in node.children:
            _build(element, child)
    elif isinstance(node, Rect):
        element = ET.SubElement(parent, "rect")
        for name in ("x", "y", "width", "height", "fill"):
            _set(element, name, getattr(node, name))
    elif isinstance(node, Line):
        element = ET.SubElement(parent, "line")
        for name in ("x1", "y1", "x2", "y2", "stroke"):
            _set(element, name, getattr(node, name))
    elif isinstance(node, Path):
        element = ET.SubElement(parent, "path")
        _set(element, "fill", node.fill)
        _set(element, "stroke", node.stroke)
        _set(element, "stroke-width", node.stroke_width)
        _set(element, "d", node.d)
    elif isinstance(node, Text):
        element = ET.SubElement(parent, "text")
        _set(element, "x", node.x)
        _set(element, "y", node.y)
        _set(element, "dy", node.dy)
        _set(element, "text-anchor", node.text_anchor)
        _set(element, "style", node.style)
        element.text = node.text
    else:
        raise TypeError(f"unsupported scene node: {type(node).__name__}")


def to_svg(scene: VectorScene) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NAMESPACE,
            "width": str(scene.width),
            "height": str(scene.height),
            "font-size": "10",
            "text-anchor": "middle",
        },
    )
    title = ET.SubElement(root, "title")
    title.text = scene.title
    _build(root, scene.root)
    return ET.tostring(root, encoding="unicode")
