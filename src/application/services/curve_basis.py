"""
Uniform cubic B-spline path data, matching the ``curveBasis`` interpolation
used by d3 so charts look the same as the ones the bank already publishes.

The curve starts and ends on the first and last points and is pulled toward,
but does not pass through, the interior points.
"""

from typing import Sequence

Point = tuple[float, float]


def fmt(value: float) -> str:
    """Compact fixed-precision number for SVG attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def basis_path(points: Sequence[Point]) -> str:
    """Return SVG path data for *points* smoothed with a basis spline."""
    if not points:
        return ""

    parts: list[str] = []

    def bezier(x0: float, y0: float, x1: float, y1: float, x: float, y: float) -> None:
        parts.append(
            "C{},{},{},{},{},{}".format(
                fmt((2 * x0 + x1) / 3), fmt((2 * y0 + y1) / 3),
                fmt((x0 + 2 * x1) / 3), fmt((y0 + 2 * y1) / 3),
                fmt((x0 + 4 * x1 + x) / 6), fmt((y0 + 4 * y1 + y) / 6),
            )
        )

    x0 = y0 = x1 = y1 = 0.0
    for index, (x, y) in enumerate(points):
        if index == 0:
            parts.append(f"M{fmt(x)},{fmt(y)}")
        elif index == 2:
            parts.append(f"L{fmt((5 * x0 + x1) / 6)},{fmt((5 * y0 + y1) / 6)}")
            bezier(x0, y0, x1, y1, x, y)
        elif index > 2:
            bezier(x0, y0, x1, y1, x, y)
        x0, x1 = x1, x
        y0, y1 = y1, y

    count = len(points)
    if count == 1:
        parts.append("Z")
    else:
        if count >= 3:
            bezier(x0, y0, x1, y1, x1, y1)
        parts.append(f"L{fmt(x1)},{fmt(y1)}")
    return "".join(parts)
