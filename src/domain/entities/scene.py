"""
Domain entities for the vector scene produced by the chart renderer.
Zero external dependencies; pure Python dataclasses only.

The scene is an immutable tree; two scenes built from the same inputs compare
equal, which is what makes rendering reproducible.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str


@dataclass(frozen=True)
class Path:
    d: str
    stroke: str
    stroke_width: Optional[float] = None
    fill: str = "none"


@dataclass(frozen=True)
class Text:
    text: str
    x: float = 0
    y: float = 0
    dy: Optional[str] = None
    text_anchor: Optional[str] = None
    style: Optional[str] = None


@dataclass(frozen=True)
class Group:
    children: tuple["Node", ...] = ()
    transform: Optional[str] = None
    css_class: Optional[str] = None


Node = Union[Rect, Line, Path, Text, Group]


@dataclass(frozen=True)
class VectorScene:
    width: int
    height: int
    title: str
    root: Group

    def walk(self):
        """Yield every node of the tree depth-first, root included."""
        stack: list[Node] = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Group):
                stack.extend(reversed(node.children))

    def find_group(self, css_class: str) -> Optional[Group]:
        for node in self.walk():
            if isinstance(node, Group) and node.css_class == css_class:
                return node
        return None
