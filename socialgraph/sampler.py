"""
Degree-biased graph sampling for interactive rendering.

The top half of the budget always goes to the highest-degree nodes so hubs
stay visible. The rest is filled uniformly at random from the remaining
nodes, so two calls with the same parameters can return different
samples. Pass a seeded ``random.Random`` as ``rng`` to make a call
reproducible.
"""

import logging
import math
import random
from typing import Optional, Sequence

from socialgraph.models import Edge, Node, SampleResult, endpoint_id

logger = logging.getLogger(__name__)


def sample(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    target_size: int,
    rng: Optional[random.Random] = None,
) -> SampleResult:
    """Select at most ``target_size`` nodes plus the edges they induce.

    Args:
        nodes: Node set with degrees filled in
        edges: Edge set
        target_size: Node budget; 0 or negative means unbounded
        rng: Random source for the fill phase, fresh unseeded one if None

    Returns:
        SampleResult whose edges all have both endpoints among its nodes
    """
    total_nodes = len(nodes)
    total_edges = len(edges)

    if target_size <= 0 or target_size >= total_nodes:
        return SampleResult(
            nodes=tuple(nodes),
            edges=tuple(edges),
            total_nodes=total_nodes,
            total_edges=total_edges,
        )

    if rng is None:
        rng = random.Random()

    ranked = sorted(nodes, key=lambda node: node.degree, reverse=True)
    hub_count = math.ceil(target_size / 2)
    selected = ranked[:hub_count]

    remaining = ranked[hub_count:]
    fill_count = min(target_size - len(selected), len(remaining))
    selected.extend(rng.sample(remaining, fill_count))

    selected_ids = {node.id for node in selected}
    kept_edges = tuple(
        edge
        for edge in edges
        if endpoint_id(edge.source) in selected_ids and endpoint_id(edge.target) in selected_ids
    )

    logger.info(
        f"Sampled {len(selected)} of {total_nodes} nodes ({hub_count} hubs), "
        f"{len(kept_edges)} of {total_edges} edges"
    )

    return SampleResult(
        nodes=tuple(selected),
        edges=kept_edges,
        total_nodes=total_nodes,
        total_edges=total_edges,
    )
