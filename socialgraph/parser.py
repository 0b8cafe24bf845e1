"""
Graph parser: turns raw dataset text into a GraphSnapshot.

Supported formats:
- ``edge-list``: one ``source target [weight]`` record per line, whitespace separated
- ``csv``: comma separated with a header row naming ``source`` and ``target``
- ``json-nodes-links``: ``{"nodes": [...], "links": [...]}``
- ``json-vertices-edges``: ``{"vertices": [...], "edges": [...]}`` with
  ``label``/``community``/``weight`` fields

Text formats skip blank and comment lines silently. A retained line that
cannot be read as an edge is tallied in the ParseReport and skipped; only
an empty node set after parsing is fatal.
"""

import csv
import json
import logging
import math
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from socialgraph.degree import with_degrees
from socialgraph.models import Edge, GraphSnapshot, Node, ParseReport, endpoint_id
from socialgraph.utils.validation import ParseError, ValidationError, validate_json

logger = logging.getLogger(__name__)

FORMAT_EDGE_LIST = "edge-list"
FORMAT_CSV = "csv"
FORMAT_JSON_NODES_LINKS = "json-nodes-links"
FORMAT_JSON_VERTICES_EDGES = "json-vertices-edges"

FORMATS = (FORMAT_EDGE_LIST, FORMAT_CSV, FORMAT_JSON_NODES_LINKS, FORMAT_JSON_VERTICES_EDGES)

DEFAULT_COMMENT_PREFIX = "#"
DEFAULT_EDGE_VALUE = 1


class GraphBuilder:
    """Accumulates nodes and edges while parsing.

    Nodes are created lazily the first time an id is seen and keep
    first-seen order. Adding an edge creates any missing endpoint first,
    so no edge ever references an unknown node.
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.edges: List[Edge] = []

    def add_node(self, node_id: int, name: Optional[str] = None, group: Optional[int] = None) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            node = Node.create(node_id, name=name, group=group)
            self.nodes[node_id] = node
        return node

    def add_edge(self, source: int, target: int, value: Any = DEFAULT_EDGE_VALUE) -> Edge:
        self.add_node(source)
        self.add_node(target)
        edge = Edge(source=source, target=target, value=value)
        self.edges.append(edge)
        return edge

    def build(self, report: ParseReport) -> GraphSnapshot:
        """Validate and freeze into a snapshot with recomputed degrees.

        Raises:
            ParseError: If no node was extracted
        """
        if not self.nodes:
            raise ParseError("no valid nodes")

        nodes = tuple(self.nodes.values())
        edges = tuple(self.edges)
        return GraphSnapshot(nodes=with_degrees(nodes, edges), edges=edges, report=report)


def _decode(raw: Union[bytes, str]) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Input is not valid UTF-8: {e}")
    return raw.lstrip("\ufeff")


def _data_lines(text: str, comment_prefix: str) -> Iterator[Tuple[int, str]]:
    """Yield (line number, stripped line), skipping blank and comment lines."""
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(comment_prefix):
            continue
        yield number, stripped


def parse_edge_value(token: Any) -> Any:
    """Edge weight from a token; anything unusable becomes the default of 1."""
    if token is None:
        return DEFAULT_EDGE_VALUE
    if isinstance(token, bool):
        return DEFAULT_EDGE_VALUE
    if isinstance(token, (int, float)):
        value = token
    else:
        text = str(token).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return DEFAULT_EDGE_VALUE
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_EDGE_VALUE
    return value


def _parse_id(token: str) -> Optional[int]:
    """Integer id from ASCII digits with an optional sign, else None."""
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(token)


def parse_edge_list(text: str, comment_prefix: str = DEFAULT_COMMENT_PREFIX) -> GraphSnapshot:
    """Parse whitespace separated ``source target [weight]`` lines."""
    builder = GraphBuilder()
    total = 0
    errors = 0

    for number, line in _data_lines(text, comment_prefix):
        total += 1
        parts = line.split()

        if len(parts) < 2:
            logger.debug(f"Skipping line {number}: not enough columns - {line!r}")
            errors += 1
            continue

        source = _parse_id(parts[0])
        target = _parse_id(parts[1])
        if source is None or target is None:
            logger.debug(f"Skipping line {number}: ids are not integers - {line!r}")
            errors += 1
            continue

        weight = parts[2] if len(parts) > 2 else None
        builder.add_edge(source, target, parse_edge_value(weight))

    report = ParseReport(
        format=FORMAT_EDGE_LIST, total_lines=total, accepted=total - errors, errors=errors
    )
    return builder.build(report)


def parse_csv(text: str, comment_prefix: str = DEFAULT_COMMENT_PREFIX) -> GraphSnapshot:
    """Parse comma separated rows under a ``source,target[,weight]`` header.

    Raises:
        ValidationError: If the header lacks a source or target column
    """
    lines = _data_lines(text, comment_prefix)
    header_entry = next(lines, None)
    if header_entry is None:
        raise ParseError("no valid nodes")

    header = [column.strip().lower() for column in next(csv.reader([header_entry[1]]))]
    missing = [name for name in ("source", "target") if name not in header]
    if missing:
        raise ValidationError(f"CSV header is missing required column(s): {', '.join(missing)}")

    source_col = header.index("source")
    target_col = header.index("target")
    weight_col = None
    for name in ("weight", "value"):
        if name in header:
            weight_col = header.index(name)
            break

    builder = GraphBuilder()
    total = 0
    errors = 0
    needed = max(source_col, target_col) + 1

    for number, line in lines:
        total += 1
        row = [cell.strip() for cell in next(csv.reader([line]))]

        if len(row) < needed:
            logger.debug(f"Skipping line {number}: not enough columns - {line!r}")
            errors += 1
            continue

        source = _parse_id(row[source_col])
        target = _parse_id(row[target_col])
        if source is None or target is None:
            logger.debug(f"Skipping line {number}: ids are not integers - {line!r}")
            errors += 1
            continue

        weight = row[weight_col] if weight_col is not None and weight_col < len(row) else None
        builder.add_edge(source, target, parse_edge_value(weight))

    report = ParseReport(format=FORMAT_CSV, total_lines=total, accepted=total - errors, errors=errors)
    return builder.build(report)


def normalize_nodes_links(data: Dict[str, Any]) -> GraphSnapshot:
    """Normalize ``{"nodes", "links"}`` data (``edges`` accepted for ``links``)."""
    validate_json(data, "NodesLinksGraph")

    builder = GraphBuilder()
    for record in data["nodes"]:
        builder.add_node(record["id"], name=record.get("name"), group=record.get("group"))

    links = data.get("links", data.get("edges", []))
    for link in links:
        builder.add_edge(
            endpoint_id(link["source"]),
            endpoint_id(link["target"]),
            parse_edge_value(link.get("value")),
        )

    report = ParseReport(format=FORMAT_JSON_NODES_LINKS, total_lines=len(links), accepted=len(links))
    return builder.build(report)


def normalize_vertices_edges(data: Dict[str, Any]) -> GraphSnapshot:
    """Normalize ``{"vertices", "edges"}`` data with label/community/weight fields."""
    validate_json(data, "VerticesEdgesGraph")

    builder = GraphBuilder()
    for record in data["vertices"]:
        builder.add_node(record["id"], name=record.get("label"), group=record.get("community"))

    edges = data.get("edges", [])
    for edge in edges:
        builder.add_edge(
            endpoint_id(edge["source"]),
            endpoint_id(edge["target"]),
            parse_edge_value(edge.get("weight")),
        )

    report = ParseReport(format=FORMAT_JSON_VERTICES_EDGES, total_lines=len(edges), accepted=len(edges))
    return builder.build(report)


def _parse_json(text: str, normalizer: Callable[[Dict[str, Any]], GraphSnapshot]) -> GraphSnapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}")
    return normalizer(data)


def parse(
    raw: Union[bytes, str],
    format_hint: str = FORMAT_EDGE_LIST,
    comment_prefix: str = DEFAULT_COMMENT_PREFIX,
) -> GraphSnapshot:
    """Parse raw input in the given format into a snapshot.

    Args:
        raw: Dataset contents, bytes are decoded as UTF-8
        format_hint: One of FORMATS
        comment_prefix: Marker for comment lines in text formats

    Returns:
        GraphSnapshot with degrees computed and a ParseReport attached

    Raises:
        ParseError: If the input yields no nodes or is not decodable
        ValidationError: If the format is unknown or structured input is malformed
    """
    text = _decode(raw)

    if format_hint == FORMAT_EDGE_LIST:
        snapshot = parse_edge_list(text, comment_prefix)
    elif format_hint == FORMAT_CSV:
        snapshot = parse_csv(text, comment_prefix)
    elif format_hint == FORMAT_JSON_NODES_LINKS:
        snapshot = _parse_json(text, normalize_nodes_links)
    elif format_hint == FORMAT_JSON_VERTICES_EDGES:
        snapshot = _parse_json(text, normalize_vertices_edges)
    else:
        raise ValidationError(
            f"Unknown format '{format_hint}', expected one of: {', '.join(FORMATS)}"
        )

    report = snapshot.report
    logger.info(
        f"Parsed {format_hint}: {snapshot.node_count} nodes, {snapshot.edge_count} edges, "
        f"{report.errors} errors, success rate {report.success_rate:.2f}%"
    )
    return snapshot
