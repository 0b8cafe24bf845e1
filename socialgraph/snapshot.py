"""
Core-facing operations over an immutable graph snapshot.

The transport layer calls these functions with the snapshot it got from
``GraphStore.current``. Every operation only reads the snapshot. A reload
builds a complete new snapshot and swaps the store's reference, so a
reader holding the old one keeps a consistent graph.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from socialgraph import clustering, parser, sampler, stats
from socialgraph.models import GlobalStats, GraphSnapshot, NodeDetail, SampleResult
from socialgraph.utils.validation import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_NEIGHBOR_CAP = 50
DEFAULT_SAMPLE_SIZE = 500
MAX_SAMPLE_SIZE = 5000


def load_graph(
    source: Union[bytes, str], format_hint: str = parser.FORMAT_EDGE_LIST
) -> GraphSnapshot:
    """Parse raw input into a snapshot.

    Raises:
        ParseError: If no valid node can be extracted
        ValidationError: If structured input is malformed
    """
    return parser.parse(source, format_hint)


def resolve_sample_size(
    target_size: Optional[int],
    default_size: int = DEFAULT_SAMPLE_SIZE,
    max_size: int = MAX_SAMPLE_SIZE,
) -> int:
    """Sample size for a request.

    None takes ``default_size``. Positive sizes are clamped to ``max_size``.
    Zero or less stays as is and means the whole graph.
    """
    if target_size is None:
        target_size = default_size
    if target_size > max_size:
        logger.info(f"Sample size {target_size} clamped to {max_size}")
        return max_size
    return target_size


def get_sample(snapshot: GraphSnapshot, target_size: int, rng=None) -> SampleResult:
    """Degree-biased sample of at most ``target_size`` nodes (0 = everything)."""
    return sampler.sample(snapshot.nodes, snapshot.edges, target_size, rng=rng)


def get_global_stats(snapshot: GraphSnapshot, clustering_cap: Optional[int] = None) -> GlobalStats:
    """Global statistics; ``avg_clustering`` is an estimate over a node prefix."""
    return stats.aggregate(snapshot.nodes, snapshot.edges, clustering_cap)


def get_node_detail(
    snapshot: GraphSnapshot, node_id: int, neighbor_cap: int = DEFAULT_NEIGHBOR_CAP
) -> NodeDetail:
    """Degree, connections and local clustering of one node.

    ``neighbors`` lists the other endpoint of each incident edge in edge
    order, truncated to ``neighbor_cap``; ``total_neighbor_count`` is the
    untruncated length.

    Raises:
        NotFoundError: If the node does not exist
    """
    node = snapshot.node_index.get(node_id)
    if node is None:
        raise NotFoundError(node_id)

    connections = snapshot.connections.get(node_id, [])
    coefficient = clustering.clustering_from_adjacency(node_id, snapshot.adjacency)

    return NodeDetail(
        id=node.id,
        name=node.name,
        group=node.group,
        degree=node.degree,
        neighbors=tuple(connections[: max(neighbor_cap, 0)]),
        total_neighbor_count=len(connections),
        local_clustering=coefficient,
    )


def get_community_stats(snapshot: GraphSnapshot) -> Dict[int, Dict[str, float]]:
    """Node count and average degree per community group."""
    return {
        group: {"count": community.count, "avgDegree": community.avg_degree}
        for group, community in stats.community_distribution(snapshot.nodes).items()
    }


def save_snapshot(snapshot: GraphSnapshot, path: Union[str, Path]) -> Path:
    """Write the snapshot as ``{"nodes": [...], "links": [...]}`` JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info(f"Snapshot saved to {path}")
    return path


def load_snapshot(path: Union[str, Path]) -> GraphSnapshot:
    """Read a snapshot written by save_snapshot.

    Stored degrees are ignored and recomputed.

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the file holds no valid nodes or invalid JSON
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    with open(path, "rb") as f:
        raw = f.read()
    logger.info(f"Loading snapshot: {path}")
    return parser.parse(raw, parser.FORMAT_JSON_NODES_LINKS)


class GraphStore:
    """Process-wide holder of the current snapshot.

    ``current`` is a plain attribute read. Loads parse outside the lock and
    only the final reference swap happens under it.

    ``config`` is the dict from ``load_config()``. Its ``[sampler]``,
    ``[node_detail]`` and ``[stats]`` sections drive the request-level
    helpers; without it the module defaults apply.
    """

    def __init__(
        self, snapshot: Optional[GraphSnapshot] = None, config: Optional[Dict[str, Any]] = None
    ):
        self._lock = threading.Lock()
        self._snapshot = snapshot
        self.config = config or {}

    @property
    def current(self) -> GraphSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("No graph loaded")
        return snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def replace(self, snapshot: GraphSnapshot) -> Optional[GraphSnapshot]:
        """Swap in a new snapshot, returning the previous one (or None)."""
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot
        logger.info(
            f"Graph snapshot replaced: {snapshot.node_count} nodes, {snapshot.edge_count} edges"
        )
        return previous

    def load(
        self, source: Union[bytes, str], format_hint: str = parser.FORMAT_EDGE_LIST
    ) -> GraphSnapshot:
        """Parse and install a new snapshot. On error the current one stays."""
        snapshot = load_graph(source, format_hint)
        self.replace(snapshot)
        return snapshot

    def reload_from(self, path: Union[str, Path]) -> GraphSnapshot:
        """Install the snapshot stored at ``path``."""
        snapshot = load_snapshot(path)
        self.replace(snapshot)
        return snapshot

    def sample(self, target_size: Optional[int] = None, rng=None) -> SampleResult:
        """Sample the current graph using the configured default and maximum size."""
        sampler_config = self.config.get("sampler", {})
        size = resolve_sample_size(
            target_size,
            sampler_config.get("default_sample_size", DEFAULT_SAMPLE_SIZE),
            sampler_config.get("max_sample_size", MAX_SAMPLE_SIZE),
        )
        return get_sample(self.current, size, rng=rng)

    def node_detail(self, node_id: int) -> NodeDetail:
        neighbor_cap = self.config.get("node_detail", {}).get("neighbor_cap", DEFAULT_NEIGHBOR_CAP)
        return get_node_detail(self.current, node_id, neighbor_cap)

    def global_stats(self) -> GlobalStats:
        return get_global_stats(
            self.current, self.config.get("stats", {}).get("clustering_sample_cap")
        )
