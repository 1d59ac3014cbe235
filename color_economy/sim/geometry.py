# color_economy/sim/geometry.py
from __future__ import annotations
from typing import List, Optional, Sequence
import math

from .models import Vec

EPS_DET = 1e-5


def polygon_center(vertices: Sequence[Vec]) -> Vec:
    """Vertex centroid (mean of the corners)."""
    n = len(vertices)
    if n == 0:
        return (0.0, 0.0)
    return (sum(p[0] for p in vertices) / n, sum(p[1] for p in vertices) / n)


def point_in_polygon(point: Vec, polygon: Sequence[Vec]) -> bool:
    """Even-odd ray cast. Fewer than 3 vertices never contain anything."""
    if len(polygon) < 3:
        return False
    px, py = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > py) != (yj > py):
            if px < (xj - xi) * (py - yi) / (yj - yi) + xi:
                inside = not inside
        j = i
    return inside


def line_intersection(p1: Vec, p2: Vec, p3: Vec, p4: Vec) -> Optional[Vec]:
    """Intersection of infinite lines p1-p2 and p3-p4, None if (near) parallel."""
    a1 = p2[1] - p1[1]
    b1 = p1[0] - p2[0]
    c1 = a1 * p1[0] + b1 * p1[1]
    a2 = p4[1] - p3[1]
    b2 = p3[0] - p4[0]
    c2 = a2 * p3[0] + b2 * p3[1]
    det = a1 * b2 - a2 * b1
    if abs(det) < EPS_DET:
        return None
    return ((b2 * c1 - b1 * c2) / det, (a1 * c2 - a2 * c1) / det)


def clip_polygon(subject: Sequence[Vec], p: Vec, normal: Vec) -> List[Vec]:
    """
    Sutherland-Hodgman clip of `subject` against the half-plane
    {q : (q - p) . normal >= 0}.
    """
    out: List[Vec] = []
    n = len(subject)
    if n == 0:
        return out
    # second point on the clip line
    q = (p[0] + normal[1], p[1] - normal[0])

    def side(v: Vec) -> float:
        return (v[0] - p[0]) * normal[0] + (v[1] - p[1]) * normal[1]

    for i in range(n):
        cur = subject[i]
        prev = subject[i - 1]
        cur_d = side(cur)
        prev_d = side(prev)
        if cur_d >= 0:
            if prev_d < 0:
                hit = line_intersection(prev, cur, p, q)
                if hit is not None:
                    out.append(hit)
            out.append(cur)
        elif prev_d >= 0:
            hit = line_intersection(prev, cur, p, q)
            if hit is not None:
                out.append(hit)
    return out


def dist(a: Vec, b: Vec) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
