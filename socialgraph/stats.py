"""
Global graph statistics: degree extrema, density, community distribution,
clustering estimate and connected components.

Nothing here raises on a well-formed graph. An empty graph yields zeroed
statistics.
"""

import logging
from typing import Any, Dict, Optional, Sequence

import networkx as nx

from socialgraph.clustering import DEFAULT_SAMPLE_CAP, average_clustering
from socialgraph.models import CommunityStats, GlobalStats, Node, endpoint_id

logger = logging.getLogger(__name__)


def density(node_count: int, edge_count: int) -> float:
    """Edges over possible edges of a simple undirected graph, 0 below two nodes."""
    if node_count < 2:
        return 0.0
    possible = node_count * (node_count - 1) / 2
    return edge_count / possible


def community_distribution(nodes: Sequence[Node]) -> Dict[int, CommunityStats]:
    """Per-group node count and total degree, groups in ascending order."""
    counts: Dict[int, int] = {}
    totals: Dict[int, int] = {}
    for node in nodes:
        counts[node.group] = counts.get(node.group, 0) + 1
        totals[node.group] = totals.get(node.group, 0) + node.degree
    return {
        group: CommunityStats(count=counts[group], total_degree=totals[group])
        for group in sorted(counts)
    }


def to_networkx(nodes: Sequence[Node], edges: Sequence[Any]) -> nx.MultiGraph:
    """Undirected multigraph view of the node/edge lists.

    Parallel edges and self-loops are kept, matching the degree accounting.
    """
    G = nx.MultiGraph()  # noqa: N806
    for node in nodes:
        G.add_node(node.id, name=node.name, group=node.group)
    for edge in edges:
        G.add_edge(endpoint_id(edge.source), endpoint_id(edge.target), value=edge.value)
    return G


def component_count(nodes: Sequence[Node], edges: Sequence[Any]) -> int:
    if not nodes:
        return 0
    return nx.number_connected_components(to_networkx(nodes, edges))


def aggregate(
    nodes: Sequence[Node],
    edges: Sequence[Any],
    clustering_cap: Optional[int] = None,
) -> GlobalStats:
    """Compute global statistics for a graph whose degrees are already set.

    Args:
        nodes: Node set with degrees filled in
        edges: Edge set
        clustering_cap: How many leading nodes feed the clustering estimate

    Returns:
        GlobalStats; avg_clustering is an estimate when the graph has more
        nodes than clustering_cap
    """
    if clustering_cap is None:
        clustering_cap = DEFAULT_SAMPLE_CAP

    n = len(nodes)
    degrees = [node.degree for node in nodes]

    if degrees:
        max_degree = max(degrees)
        min_degree = min(degrees)
        avg_degree = sum(degrees) / n
    else:
        max_degree = min_degree = 0
        avg_degree = 0.0

    sample_size = min(n, max(clustering_cap, 0))

    stats = GlobalStats(
        total_nodes=n,
        total_edges=len(edges),
        max_degree=max_degree,
        min_degree=min_degree,
        avg_degree=avg_degree,
        density=density(n, len(edges)),
        avg_clustering=average_clustering(nodes, edges, clustering_cap),
        clustering_sample_size=sample_size,
        clustering_is_estimate=sample_size < n,
        component_count=component_count(nodes, edges),
        community_distribution=community_distribution(nodes),
    )

    logger.debug(
        f"Stats: {stats.total_nodes} nodes, {stats.total_edges} edges, "
        f"density {stats.density:.6f}, avg clustering {stats.avg_clustering:.4f}"
    )
    return stats
