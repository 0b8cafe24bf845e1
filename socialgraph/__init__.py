"""
socialgraph - graph analytics and sampling for edge-list social graphs.

Parses edge lists into an immutable snapshot, computes degree, density and
clustering statistics, and produces degree-biased samples sized for
interactive rendering.
"""

from .models import (
    CommunityStats,
    Edge,
    GlobalStats,
    GraphSnapshot,
    Node,
    NodeDetail,
    ParseReport,
    SampleResult,
)
from .snapshot import (
    GraphStore,
    get_community_stats,
    get_global_stats,
    get_node_detail,
    get_sample,
    load_graph,
    load_snapshot,
    save_snapshot,
)
from .utils.validation import GraphError, NotFoundError, ParseError, ValidationError

__version__ = "0.1.0"

__all__ = [
    # models
    "Node",
    "Edge",
    "ParseReport",
    "GraphSnapshot",
    "SampleResult",
    "CommunityStats",
    "GlobalStats",
    "NodeDetail",
    # operations
    "load_graph",
    "get_sample",
    "get_global_stats",
    "get_node_detail",
    "get_community_stats",
    "save_snapshot",
    "load_snapshot",
    "GraphStore",
    # errors
    "GraphError",
    "ParseError",
    "ValidationError",
    "NotFoundError",
]
