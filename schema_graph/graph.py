"""Type graph extraction via breadth-first traversal from the query type."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .errors import NoRootTypeError, RootTypeNotFoundError
from .nodes import TypeNode, create_type_node
from .parser import parse_introspection

logger = logging.getLogger(__name__)


class EdgeKind(str, Enum):
    """Relationship between two types."""

    FIELD = "FIELD"
    IMPLEMENTS = "IMPLEMENTS"
    UNION_MEMBER = "UNION_MEMBER"


@dataclass(frozen=True)
class Edge:
    """Directed relationship; field_name is set only for FIELD edges."""

    source: str
    target: str
    kind: EdgeKind
    field_name: Optional[str] = None


@dataclass(frozen=True)
class TypeGraph:
    """Types reachable from the root, with edges in discovery order."""

    nodes: Mapping[str, TypeNode]
    edges: tuple[Edge, ...]
    root: TypeNode

    def dangling_edges(self) -> list[Edge]:
        """Edges whose target has no node (type missing from the introspection data)."""
        return [e for e in self.edges if e.target not in self.nodes]


def extract_graph(document: dict) -> TypeGraph:
    """
    Extract the type graph reachable from the schema's query type.

    Edges are emitted per dequeued type in the order FIELD (declaration order),
    IMPLEMENTS, UNION_MEMBER. A target without a type record still gets its
    edge but no node.

    Args:
        document: Introspection document

    Returns:
        TypeGraph rooted at the query type

    Raises:
        InvalidInputError: If __schema.types is missing
        NoRootTypeError: If the schema declares no query type
        RootTypeNotFoundError: If the query type has no type record
    """
    parsed = parse_introspection(document)

    if not parsed.query_type_name:
        raise NoRootTypeError("No query type found in schema")

    type_map = {t["name"]: t for t in parsed.types}

    root_data = type_map.get(parsed.query_type_name)
    if root_data is None:
        raise RootTypeNotFoundError(parsed.query_type_name)

    root = create_type_node(root_data)
    nodes: dict[str, TypeNode] = {root.name: root}
    edges: list[Edge] = []
    queue = deque([root.name])

    def discover(name: str) -> None:
        # nodes doubles as the visited set
        if name in nodes:
            return
        type_data = type_map.get(name)
        if type_data is None:
            return
        nodes[name] = create_type_node(type_data)
        queue.append(name)

    def link(source: str, targets: Iterable[str], kind: EdgeKind) -> None:
        for target in targets:
            edges.append(Edge(source=source, target=target, kind=kind))
            discover(target)

    while queue:
        current = nodes[queue.popleft()]

        for field in current.fields or ():
            edges.append(
                Edge(source=current.name, target=field.type_name, kind=EdgeKind.FIELD, field_name=field.name)
            )
            discover(field.type_name)

        link(current.name, current.interfaces or (), EdgeKind.IMPLEMENTS)
        link(current.name, current.possible_types or (), EdgeKind.UNION_MEMBER)

    logger.debug(
        "Extracted graph from root %s: %d nodes, %d edges", root.name, len(nodes), len(edges)
    )

    return TypeGraph(nodes=MappingProxyType(nodes), edges=tuple(edges), root=root)
