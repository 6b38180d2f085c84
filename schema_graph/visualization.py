"""Diagram projection: positioned nodes and styled edges from a TypeGraph."""

import math
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Optional

from .graph import EdgeKind, TypeGraph
from .nodes import FieldInfo

Layout = Literal["grid", "hierarchical"]

NODE_WIDTH = 250
NODE_HEIGHT = 150
HORIZONTAL_SPACING = 50
VERTICAL_SPACING = 100

TYPE_KIND_COLORS = {
    "OBJECT": "#2563eb",
    "INTERFACE": "#16a34a",
    "UNION": "#ea580c",
    "SCALAR": "#6b7280",
    "ENUM": "#9333ea",
}
DEFAULT_COLOR = "#6b7280"

EDGE_STYLES = {
    EdgeKind.FIELD: {"stroke": "#2563eb", "strokeWidth": 2},
    EdgeKind.IMPLEMENTS: {"stroke": "#16a34a", "strokeWidth": 2, "strokeDasharray": "5,5"},
    EdgeKind.UNION_MEMBER: {"stroke": "#dc2626", "strokeWidth": 2, "strokeDasharray": "3,3"},
}
EDGE_LABELS = {EdgeKind.IMPLEMENTS: "implements", EdgeKind.UNION_MEMBER: "member"}


@dataclass
class DiagramNode:
    """Positioned node for rendering."""

    id: str
    label: str
    kind: str
    color: str
    fields: Optional[tuple[FieldInfo, ...]] = None
    is_relay: bool = False
    is_built_in: bool = False
    description: Optional[str] = None
    position: tuple[float, float] = (0, 0)


@dataclass
class DiagramEdge:
    """Styled edge for rendering."""

    id: str
    source: str
    target: str
    kind: EdgeKind
    label: Optional[str] = None
    animated: bool = False
    style: dict[str, Any] = field(default_factory=dict)
    type: str = "smoothstep"


@dataclass
class Diagram:
    """Renderable nodes and edges."""

    nodes: list[DiagramNode]
    edges: list[DiagramEdge]


@dataclass
class DiagramFilter:
    """Visibility settings for nodes and edge kinds."""

    hide_builtins: bool = False
    hide_relay: bool = False
    show_fields: bool = True
    show_implements: bool = True
    show_unions: bool = True


def to_diagram(graph: TypeGraph, layout: Layout = "grid") -> Diagram:
    """
    Convert a TypeGraph to diagram nodes and edges.

    Edge ids embed the edge's position in graph.edges, so the same graph
    always yields the same ids.

    Args:
        graph: Type graph
        layout: "grid" or "hierarchical"

    Returns:
        Diagram with positioned nodes
    """
    nodes = [
        DiagramNode(
            id=n.name,
            label=clean_type_name(n.name),
            kind=n.kind,
            color=TYPE_KIND_COLORS.get(n.kind, DEFAULT_COLOR),
            fields=n.fields,
            is_relay=n.is_relay,
            is_built_in=n.is_built_in,
            description=n.description,
        )
        for n in graph.nodes.values()
    ]

    edges = [
        DiagramEdge(
            id=f"e-{e.source}-{e.target}-{i}",
            source=e.source,
            target=e.target,
            kind=e.kind,
            label=e.field_name if e.kind == EdgeKind.FIELD else EDGE_LABELS.get(e.kind),
            animated=e.kind == EdgeKind.FIELD,
            style=dict(EDGE_STYLES[e.kind]),
        )
        for i, e in enumerate(graph.edges)
    ]

    if layout == "hierarchical":
        nodes = hierarchical_layout(nodes, edges, graph.root.name)
    elif layout == "grid":
        nodes = grid_layout(nodes)
    else:
        raise ValueError(f"Unknown layout: {layout}")

    return Diagram(nodes=nodes, edges=edges)


def clean_type_name(name: str) -> str:
    """Drop a trailing "Type" for display (DeviceType -> Device)."""
    if name.endswith("Type") and name != "Type":
        return name[:-4]
    return name


def grid_layout(nodes: list[DiagramNode]) -> list[DiagramNode]:
    """Arrange nodes row by row in a square-ish grid."""
    cols = max(1, math.ceil(math.sqrt(len(nodes))))
    return [
        replace(node, position=((i % cols) * NODE_WIDTH, (i // cols) * NODE_HEIGHT))
        for i, node in enumerate(nodes)
    ]


def hierarchical_layout(
    nodes: list[DiagramNode], edges: list[DiagramEdge], root_id: str
) -> list[DiagramNode]:
    """
    Arrange nodes in horizontal layers by BFS depth from the root.

    Each layer is centered on x = 0. Nodes not reachable from the root go on
    one extra row below the deepest layer.

    Args:
        nodes: Diagram nodes
        edges: Diagram edges defining the hierarchy
        root_id: Id of the root node

    Returns:
        Nodes with computed positions, layer by layer
    """
    adjacency: dict[str, list[str]] = {}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)

    layers: list[list[str]] = []
    visited = set()
    queue = deque([(root_id, 0)])

    while queue:
        node_id, depth = queue.popleft()
        if node_id in visited:
            continue
        visited.add(node_id)

        if depth == len(layers):
            layers.append([])
        layers[depth].append(node_id)

        for child in adjacency.get(node_id, []):
            if child not in visited:
                queue.append((child, depth + 1))

    by_id = {n.id: n for n in nodes}
    positioned = []

    for depth, node_ids in enumerate(layers):
        # Dangling edge targets have no diagram node
        present = [i for i in node_ids if i in by_id]
        y = depth * (NODE_HEIGHT + VERTICAL_SPACING)
        layer_width = len(present) * NODE_WIDTH + (len(present) - 1) * HORIZONTAL_SPACING
        start_x = -layer_width / 2
        for index, node_id in enumerate(present):
            x = start_x + index * (NODE_WIDTH + HORIZONTAL_SPACING)
            positioned.append(replace(by_id[node_id], position=(x, y)))

    orphans = [n for n in nodes if n.id not in visited]
    y = (len(layers) + 1) * (NODE_HEIGHT + VERTICAL_SPACING)
    for index, node in enumerate(orphans):
        positioned.append(replace(node, position=(index * (NODE_WIDTH + HORIZONTAL_SPACING), y)))

    return positioned


def filter_diagram(diagram: Diagram, filters: DiagramFilter) -> Diagram:
    """
    Hide nodes and edge kinds according to filters.

    Edges survive only if both endpoints are visible nodes.
    """
    nodes = [
        n
        for n in diagram.nodes
        if not (filters.hide_builtins and n.is_built_in) and not (filters.hide_relay and n.is_relay)
    ]
    visible = {n.id for n in nodes}

    shown_kinds = {
        EdgeKind.FIELD: filters.show_fields,
        EdgeKind.IMPLEMENTS: filters.show_implements,
        EdgeKind.UNION_MEMBER: filters.show_unions,
    }
    edges = [
        e
        for e in diagram.edges
        if e.source in visible and e.target in visible and shown_kinds[e.kind]
    ]

    return Diagram(nodes=nodes, edges=edges)


def search_nodes(diagram: Diagram, query: str) -> list[str]:
    """Ids of nodes whose label contains query (case-insensitive)."""
    query = query.strip().lower()
    if not query:
        return []
    return [n.id for n in diagram.nodes if query in n.label.lower()]


def diagram_to_dict(diagram: Diagram) -> dict:
    """JSON-ready form of a diagram (camelCase keys for the web renderer)."""
    return {
        "nodes": [
            {
                "id": n.id,
                "type": "default",
                "data": {
                    "label": n.label,
                    "kind": n.kind,
                    "color": n.color,
                    "fields": [{"name": f.name, "typeName": f.type_name, "description": f.description} for f in n.fields]
                    if n.fields is not None
                    else None,
                    "isRelay": n.is_relay,
                    "isBuiltIn": n.is_built_in,
                    "description": n.description,
                },
                "position": {"x": n.position[0], "y": n.position[1]},
            }
            for n in diagram.nodes
        ],
        "edges": [
            {
                "id": e.id,
                "source": e.source,
                "target": e.target,
                "type": e.type,
                "label": e.label,
                "animated": e.animated,
                "style": e.style,
                "edgeKind": e.kind.value,
            }
            for e in diagram.edges
        ],
    }
