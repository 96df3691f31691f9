#!/usr/bin/env python3
"""
Planar geometry used by the route solver's exclusion-zone check.
"""
import math

from .vector_utils import Vec2, clamp, vec_dot, vec_sub


def dist_point_to_segment(p: Vec2, a: Vec2, b: Vec2) -> float:
    """
    Shortest distance from point p to the closed segment ab.

    The projection of ap onto ab is clamped to [0, 1] so points beyond either
    end measure to the nearest endpoint. A zero-length segment degrades to the
    point-to-point distance |p - a|.
    """
    ab = vec_sub(b, a)
    ap = vec_sub(p, a)

    ab2 = vec_dot(ab, ab)
    if ab2 == 0:
        return math.hypot(ap[0], ap[1])

    t = clamp(vec_dot(ap, ab) / ab2, 0.0, 1.0)
    cx = a[0] + t * ab[0]
    cy = a[1] + t * ab[1]
    return math.hypot(p[0] - cx, p[1] - cy)
