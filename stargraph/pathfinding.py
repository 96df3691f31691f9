#!/usr/bin/env python3
"""
Route solver over the star-link graph.

Edge weights are recomputed from live body positions on every query (a link's
stored distance is only a display hint) and optionally raised to a power so
long hops cost disproportionately more. Edges whose segment passes within the
exclusion radius of the anchor body are either dropped or penalised, which
models "you cannot fly through the sun".

The search is Dijkstra with a binary heap. Equal tentative costs are settled in
body-list order, so results are deterministic for a given snapshot.
"""
import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import DEFAULT_EXCLUSION_PENALTY
from .data_models import Body, Link
from .geometry import dist_point_to_segment
from .vector_utils import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathOptions:
    """
    Route cost model.

    Fields:
    - anchor_id: Body whose surroundings are the exclusion zone (None disables it)
    - exclusion_radius: Radius of the zone around the anchor
    - forbid_through_anchor: Drop crossing edges instead of penalising them
    - penalty: Additive cost for crossing edges when not forbidden
    - power_exponent: Edge weight is length ** power_exponent
    """
    anchor_id: Optional[str] = None
    exclusion_radius: float = 0.0
    forbid_through_anchor: bool = False
    penalty: float = DEFAULT_EXCLUSION_PENALTY
    power_exponent: float = 1.0


@dataclass
class PathResult:
    path: List[str] = field(default_factory=list)
    cost: float = math.inf

    @property
    def found(self) -> bool:
        return math.isfinite(self.cost)


def build_adjacency(bodies: Sequence[Body], links: Sequence[Link],
                    options: PathOptions) -> Dict[str, List[Tuple[str, float]]]:
    """Weighted undirected adjacency; links with unknown endpoints are skipped."""
    by_id = {b.id: b for b in bodies}
    adj: Dict[str, List[Tuple[str, float]]] = {b.id: [] for b in bodies}
    anchor = by_id.get(options.anchor_id) if options.anchor_id is not None else None

    for link in links:
        a = by_id.get(link.source)
        b = by_id.get(link.target)
        if a is None or b is None or a.id == b.id:
            continue

        w = distance(a.position, b.position) ** options.power_exponent
        if anchor is not None:
            clearance = dist_point_to_segment(anchor.position, a.position, b.position)
            if clearance < options.exclusion_radius:
                if options.forbid_through_anchor:
                    logger.debug("Edge %s-%s excluded (clearance %.2f)", a.id, b.id, clearance)
                    continue
                w += options.penalty

        adj[a.id].append((b.id, w))
        adj[b.id].append((a.id, w))

    return adj


def shortest_path(bodies: Sequence[Body], links: Sequence[Link], start_id: str,
                  goal_id: str, options: Optional[PathOptions] = None) -> PathResult:
    """
    Cheapest route from start_id to goal_id.

    Returns PathResult(path, cost) with the path in start -> goal order, or an
    empty path and infinite cost when the goal cannot be reached.
    """
    options = options or PathOptions()
    adj = build_adjacency(bodies, links, options)
    if start_id not in adj or goal_id not in adj:
        return PathResult()

    order = {b.id: i for i, b in enumerate(bodies)}
    dist: Dict[str, float] = {start_id: 0.0}
    prev: Dict[str, Optional[str]] = {start_id: None}
    settled = set()
    heap = [(0.0, order[start_id], start_id)]

    while heap:
        d, _, node = heapq.heappop(heap)
        if node in settled:
            continue
        if node == goal_id:
            break
        settled.add(node)

        for nxt, w in adj[node]:
            nd = d + w
            if nd < dist.get(nxt, math.inf):
                dist[nxt] = nd
                prev[nxt] = node
                heapq.heappush(heap, (nd, order[nxt], nxt))

    total = dist.get(goal_id, math.inf)
    if not math.isfinite(total):
        return PathResult()

    path = []
    cur: Optional[str] = goal_id
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return PathResult(path=path, cost=total)
