"""Relationship graphs from GraphQL introspection data."""

from .errors import InvalidInputError, NoRootTypeError, RootTypeNotFoundError, SchemaGraphError
from .graph import Edge, EdgeKind, TypeGraph, extract_graph
from .nodes import FieldInfo, TypeNode, create_type_node
from .parser import parse_introspection, resolve_base_name

__version__ = "0.1.0"
