#!/usr/bin/env python3
"""
Viewer camera: world <-> screen transforms.

World y grows upward, screen y grows downward. `upp` is world units per pixel,
so a larger upp shows more of the system.
"""
from typing import Iterable, Optional, Tuple

from .constants import (
    DEFAULT_UNITS_PER_PIXEL,
    MAX_UNITS_PER_PIXEL,
    MIN_UNITS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec2, clamp, vec_add, vec_scale, vec_sub


class Camera2D:
    def __init__(self, center: Vec2 = (0.0, 0.0), units_per_pixel: float = DEFAULT_UNITS_PER_PIXEL):
        self.center: Vec2 = (float(center[0]), float(center[1]))
        self.upp = units_per_pixel
        self.size: Tuple[int, int] = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.size = (w, h)

    def _pixel_offset(self, screen: Tuple[int, int]) -> Vec2:
        # screen pixel relative to the viewport middle, y flipped to point up
        return (screen[0] - self.size[0] / 2, self.size[1] / 2 - screen[1])

    def world_to_screen(self, pos: Vec2) -> Tuple[int, int]:
        ox, oy = vec_scale(vec_sub(pos, self.center), 1.0 / self.upp)
        return (int(self.size[0] / 2 + ox), int(self.size[1] / 2 - oy))

    def screen_to_world(self, screen: Tuple[int, int]) -> Vec2:
        return vec_add(self.center, vec_scale(self._pixel_offset(screen), self.upp))

    def zoom(self, factor: float, pivot_screen: Optional[Tuple[int, int]] = None) -> None:
        """factor > 1 zooms in. The world point under pivot_screen stays put."""
        new_upp = clamp(self.upp / clamp(factor, 0.05, 20.0), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
        if pivot_screen is not None:
            pivot = self.screen_to_world(pivot_screen)
            self.center = vec_sub(pivot, vec_scale(vec_sub(pivot, self.center), new_upp / self.upp))
        self.upp = new_upp

    def pan_pixels(self, dx_pixels: float, dy_pixels: float) -> None:
        """Move the view with a mouse drag of (dx, dy) screen pixels."""
        self.center = vec_add(self.center, (-dx_pixels * self.upp, dy_pixels * self.upp))

    def fit(self, points: Iterable[Vec2], margin: float = 1.3) -> None:
        pts = list(points)
        if not pts:
            self.center = (0.0, 0.0)
            self.upp = DEFAULT_UNITS_PER_PIXEL
            return
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        self.center = ((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)
        span = ((max(xs) - min(xs)) * margin + 1.0, (max(ys) - min(ys)) * margin + 1.0)
        upp = max(span[0] / max(self.size[0], 1), span[1] / max(self.size[1], 1))
        self.upp = clamp(upp, MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
