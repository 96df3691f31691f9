#!/usr/bin/env python3
"""
Data models for the Star Graph sandbox.

This module defines the Body and Link records shared between the engines, the
controller and the viewer, plus StarGraph, the canonical container the
controller owns.

Units and usage
- position and velocity are (x, y) tuples in screen units and units/second.
- mass is an arbitrary positive number; the engines divide by it unguarded,
  so callers must never construct a Body with mass <= 0.
- Engines treat Body instances as snapshots: they return new instances made
  with dataclasses.replace and leave their inputs untouched.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple


@dataclass
class Body:
    """
    A star or planet.

    Fields:
    - id: Stable identifier, unique within a snapshot
    - name: Display name
    - mass: Positive scalar mass
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy)
    - color: RGB tuple used for rendering
    """
    id: str
    name: str
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float] = (0.0, 0.0)
    color: Tuple[int, int, int] = (200, 200, 255)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def vx(self) -> float:
        return self.velocity[0]

    @property
    def vy(self) -> float:
        return self.velocity[1]


@dataclass(frozen=True)
class Link:
    """Unordered connection between two bodies; distance is a display hint only."""
    source: str
    target: str
    distance: Optional[float] = None

    @property
    def key(self) -> FrozenSet[str]:
        return frozenset((self.source, self.target))


@dataclass
class StarGraph:
    """Canonical body and link collections."""
    stars: List[Body] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    def add_star(self, body: Body) -> None:
        self.stars.append(body)

    def remove_star(self, star_id: str) -> None:
        self.stars = [s for s in self.stars if s.id != star_id]
        self.links = [l for l in self.links if star_id not in (l.source, l.target)]

    def get_star(self, star_id: str) -> Optional[Body]:
        for s in self.stars:
            if s.id == star_id:
                return s
        return None

    def has_link(self, a: str, b: str) -> bool:
        key = frozenset((a, b))
        return any(l.key == key for l in self.links)

    def add_link(self, source: str, target: str, distance: Optional[float] = None) -> bool:
        """Add an undirected link; returns False if it already exists or is a self link."""
        if source == target or self.has_link(source, target):
            return False
        self.links.append(Link(source, target, distance))
        return True

    def remove_link(self, source: str, target: str) -> bool:
        key = frozenset((source, target))
        kept = [l for l in self.links if l.key != key]
        removed = len(kept) != len(self.links)
        self.links = kept
        return removed

    def replace_stars(self, bodies: List[Body]) -> None:
        self.stars = list(bodies)
