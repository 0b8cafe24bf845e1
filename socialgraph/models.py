"""
Core data types for the social graph: nodes, edges, snapshots and the
result records returned to the transport layer.

All types are frozen dataclasses. Collections are stored as tuples so a
snapshot cannot be mutated after it is built.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Optional, Tuple

NUM_GROUPS = 8


def default_group(node_id: int) -> int:
    """Community tag in [1..8] derived from the node id."""
    return (node_id % NUM_GROUPS) + 1


def default_name(node_id: int) -> str:
    return f"User{node_id}"


def endpoint_id(endpoint: Any) -> int:
    """Normalize an edge endpoint to a node id.

    Endpoints arrive either as raw ids or as resolved node objects/mappings
    carrying an ``id`` (what a layout pass leaves behind).

    Raises:
        TypeError: If the endpoint is neither an id nor id-shaped
    """
    if isinstance(endpoint, bool):
        raise TypeError(f"Edge endpoint is not id-shaped: {endpoint!r}")
    if isinstance(endpoint, int):
        return endpoint
    if isinstance(endpoint, Mapping) and "id" in endpoint:
        return endpoint_id(endpoint["id"])
    node_id = getattr(endpoint, "id", None)
    if node_id is not None:
        return endpoint_id(node_id)
    raise TypeError(f"Edge endpoint is not id-shaped: {endpoint!r}")


@dataclass(frozen=True)
class Node:
    """Graph vertex."""

    id: int
    name: str
    group: int
    degree: int = 0

    @classmethod
    def create(
        cls, node_id: int, name: Optional[str] = None, group: Optional[int] = None
    ) -> "Node":
        return cls(
            id=node_id,
            name=name if name is not None else default_name(node_id),
            group=group if group is not None else default_group(node_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Edge:
    """Undirected edge stored as an ordered (source, target) pair."""

    source: int
    target: int
    value: float = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParseReport:
    """Ingestion tally. Per-line failures end up here instead of raising."""

    format: str
    total_lines: int = 0
    accepted: int = 0
    errors: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of retained lines that were accepted."""
        if self.total_lines == 0:
            return 100.0
        return (self.total_lines - self.errors) / self.total_lines * 100

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["success_rate"] = round(self.success_rate, 2)
        return data


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable graph loaded from one input.

    Nodes keep first-seen order, edges keep input order. A reload builds a
    new snapshot instead of mutating this one. Lookup indexes are derived
    on first use and cached on the instance.
    """

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    report: ParseReport = field(default_factory=lambda: ParseReport(format="unknown"))

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @cached_property
    def node_index(self) -> Dict[int, Node]:
        """Node id -> Node."""
        return {node.id: node for node in self.nodes}

    @cached_property
    def adjacency(self) -> Dict[int, Any]:
        """Neighbour multiplicities per node, built once per snapshot."""
        from socialgraph.clustering import build_adjacency

        return build_adjacency(self.edges, self.nodes)

    @cached_property
    def connections(self) -> Dict[int, List[int]]:
        """Other endpoint of each incident edge per node, in edge order."""
        result: Dict[int, List[int]] = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            source = endpoint_id(edge.source)
            target = endpoint_id(edge.target)
            result.setdefault(source, []).append(target)
            if target != source:
                result.setdefault(target, []).append(source)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Serialized snapshot layout: ``{"nodes": [...], "links": [...]}``."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.edges],
        }


@dataclass(frozen=True)
class SampleResult:
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    total_nodes: int
    total_edges: int

    @property
    def is_sampled(self) -> bool:
        return len(self.nodes) < self.total_nodes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.edges],
            "totalNodes": self.total_nodes,
            "totalEdges": self.total_edges,
            "sampledNodes": len(self.nodes),
            "sampledEdges": len(self.edges),
        }


@dataclass(frozen=True)
class CommunityStats:
    count: int
    total_degree: int

    @property
    def avg_degree(self) -> float:
        return self.total_degree / self.count if self.count else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "totalDegree": self.total_degree,
            "avgDegree": self.avg_degree,
        }


@dataclass(frozen=True)
class GlobalStats:
    """Whole-graph metrics.

    ``avg_clustering`` is an estimate computed over the first
    ``clustering_sample_size`` nodes; ``clustering_is_estimate`` is True
    whenever that prefix is shorter than the node set.
    """

    total_nodes: int
    total_edges: int
    max_degree: int
    min_degree: int
    avg_degree: float
    density: float
    avg_clustering: float
    clustering_sample_size: int
    clustering_is_estimate: bool
    component_count: int
    community_distribution: Dict[int, CommunityStats]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalNodes": self.total_nodes,
            "totalEdges": self.total_edges,
            "maxDegree": self.max_degree,
            "minDegree": self.min_degree,
            "avgDegree": self.avg_degree,
            "density": self.density,
            "avgClustering": self.avg_clustering,
            "clusteringSampleSize": self.clustering_sample_size,
            "clusteringIsEstimate": self.clustering_is_estimate,
            "componentCount": self.component_count,
            "communityDistribution": {
                str(group): stats.to_dict()
                for group, stats in self.community_distribution.items()
            },
        }


@dataclass(frozen=True)
class NodeDetail:
    id: int
    name: str
    group: int
    degree: int
    neighbors: Tuple[int, ...]
    total_neighbor_count: int
    local_clustering: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "group": self.group,
            "degree": self.degree,
            "connections": list(self.neighbors),
            "totalConnections": self.total_neighbor_count,
            "clusteringCoefficient": self.local_clustering,
        }
