"""
Local clustering coefficient and its averaged estimate.

Works on an adjacency mapping (node id -> Counter of neighbour ids) built
once from the edge list. The Counter keeps edge multiplicity, so parallel
edges between two neighbours are counted once per edge when closing
triangles. That can push a coefficient above 1 on multigraphs; the value
is returned as computed and a warning is logged.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, Optional, Sequence

from socialgraph.models import Node, endpoint_id
from socialgraph.utils.validation import NotFoundError

logger = logging.getLogger(__name__)

Adjacency = Dict[int, Counter]

DEFAULT_SAMPLE_CAP = 1000


def build_adjacency(edges: Iterable[Any], nodes: Optional[Sequence[Node]] = None) -> Adjacency:
    """Build undirected adjacency with edge multiplicities.

    Self-loops are left out: a node is never its own neighbour.

    Args:
        edges: Edges with id or id-shaped endpoints
        nodes: Optional node set; every node gets an entry, isolated ones included

    Returns:
        Mapping node id -> Counter(neighbour id -> number of edges)
    """
    adjacency: Adjacency = defaultdict(Counter)
    if nodes is not None:
        for node in nodes:
            adjacency.setdefault(node.id, Counter())
    for edge in edges:
        u = endpoint_id(edge.source)
        v = endpoint_id(edge.target)
        if u == v:
            continue
        adjacency[u][v] += 1
        adjacency[v][u] += 1
    return dict(adjacency)


def clustering_from_adjacency(node_id: int, adjacency: Adjacency) -> float:
    """Local clustering coefficient of one node.

    Args:
        node_id: Node to evaluate
        adjacency: Output of build_adjacency

    Returns:
        closed triangles / possible neighbour pairs, 0.0 when fewer than
        two neighbours

    Raises:
        NotFoundError: If node_id has no adjacency entry
    """
    if node_id not in adjacency:
        raise NotFoundError(node_id)

    neighbors = adjacency[node_id].keys()
    k = len(neighbors)
    if k < 2:
        return 0.0

    # Each neighbour-to-neighbour edge is seen from both of its ends
    links = 0
    for v in neighbors:
        for w, multiplicity in adjacency[v].items():
            if w != v and w in neighbors:
                links += multiplicity
    triangles = links / 2

    possible = k * (k - 1) / 2
    if possible == 0:
        return 0.0

    coefficient = triangles / possible
    if coefficient > 1.0:
        logger.warning(
            f"Clustering coefficient {coefficient:.4f} for node {node_id} exceeds 1 "
            f"(parallel edges among its neighbours)"
        )
    return coefficient


def local_clustering(node_id: int, nodes: Sequence[Node], edges: Sequence[Any]) -> float:
    """Local clustering coefficient computed straight from node/edge lists."""
    return clustering_from_adjacency(node_id, build_adjacency(edges, nodes))


def average_clustering(
    nodes: Sequence[Node],
    edges: Sequence[Any],
    sample_cap: int = DEFAULT_SAMPLE_CAP,
    adjacency: Optional[Adjacency] = None,
) -> float:
    """Mean local clustering over the first ``sample_cap`` nodes.

    This is an approximation whenever the graph has more than ``sample_cap``
    nodes: the prefix is taken in stored order, not at random, so the
    estimate is biased toward whatever the input listed first.

    Args:
        nodes: Node set in stored order
        edges: Edge set
        sample_cap: Number of leading nodes to evaluate
        adjacency: Prebuilt adjacency, built from edges when omitted

    Returns:
        Mean coefficient, 0.0 for an empty graph
    """
    sample = nodes[: max(sample_cap, 0)]
    if not sample:
        return 0.0

    if adjacency is None:
        adjacency = build_adjacency(edges, nodes)

    if len(nodes) > len(sample):
        logger.info(
            f"Average clustering estimated over first {len(sample)} of {len(nodes)} nodes"
        )

    total = sum(clustering_from_adjacency(node.id, adjacency) for node in sample)
    return total / len(sample)
