"""
Degree index: per-node degree counts derived from the edge set.

The graph is treated as undirected. Every edge adds one to the degree of
each endpoint, so a self-loop adds two to its node.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from socialgraph.models import Node, endpoint_id
from socialgraph.utils.validation import GraphInvariantError

logger = logging.getLogger(__name__)


def compute_degrees(nodes: Sequence[Node], edges: Iterable[Any]) -> Dict[int, int]:
    """Compute degree for every node from scratch.

    Args:
        nodes: Node set
        edges: Edges whose endpoints are ids or id-carrying objects

    Returns:
        Mapping node id -> degree, with an entry (possibly 0) for every node

    Raises:
        GraphInvariantError: If an edge references a node that is not in the set
    """
    degrees: Dict[int, int] = {node.id: 0 for node in nodes}

    for i, edge in enumerate(edges):
        for endpoint in (edge.source, edge.target):
            node_id = endpoint_id(endpoint)
            if node_id not in degrees:
                raise GraphInvariantError(f"Edge {i}: endpoint '{node_id}' does not exist")
            degrees[node_id] += 1

    return degrees


def apply_degrees(nodes: Sequence[Node], degrees: Dict[int, int]) -> Tuple[Node, ...]:
    """Return new nodes carrying the given degrees.

    Whatever degree a node came in with is discarded, so repeated calls
    with the same mapping give the same result.
    """
    return tuple(replace(node, degree=degrees.get(node.id, 0)) for node in nodes)


def with_degrees(nodes: Sequence[Node], edges: Sequence[Any]) -> Tuple[Node, ...]:
    """Reset-then-recompute pass used after parsing."""
    degrees = compute_degrees(nodes, edges)
    logger.debug(f"Computed degrees for {len(degrees)} nodes over {len(edges)} edges")
    return apply_degrees(nodes, degrees)


def degree_distribution(nodes: Iterable[Node]) -> Dict[int, int]:
    """Number of nodes per degree value, sorted by degree."""
    counts = Counter(node.degree for node in nodes)
    return dict(sorted(counts.items()))


def top_nodes_by_degree(nodes: Sequence[Node], n: int = 10) -> List[Node]:
    """Highest-degree nodes; ties keep stored order."""
    if n <= 0:
        return []
    return sorted(nodes, key=lambda node: node.degree, reverse=True)[:n]
