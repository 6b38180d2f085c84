"""Lightweight introspection parsing (no schema validation)."""

from dataclasses import dataclass
from typing import Any, Optional

from graphql import build_schema, introspection_from_schema

from .errors import InvalidInputError

META_PREFIX = "__"
WRAPPER_KINDS = ("LIST", "NON_NULL")


@dataclass(frozen=True)
class ParsedIntrospection:
    """Schema types minus meta-types, plus the query type name."""

    types: tuple
    query_type_name: Optional[str]


def parse_introspection(document: dict) -> ParsedIntrospection:
    """
    Parse an introspection document into its types and query type name.

    Args:
        document: Introspection result, either {"data": {"__schema": {...}}} or {"__schema": {...}}

    Returns:
        ParsedIntrospection with meta-types (``__`` prefix) removed

    Raises:
        InvalidInputError: If __schema.types is missing
    """
    if not isinstance(document, dict):
        raise InvalidInputError("Invalid introspection data: missing __schema.types")

    # Handle both formats
    if "__schema" in document:
        data = document
    else:
        data = document.get("data") or {}

    schema = data.get("__schema") if isinstance(data, dict) else None
    if not isinstance(schema, dict) or schema.get("types") is None:
        raise InvalidInputError("Invalid introspection data: missing __schema.types")

    types = tuple(t for t in schema["types"] if not t["name"].startswith(META_PREFIX))

    query_type = schema.get("queryType")
    query_type_name = (query_type.get("name") if isinstance(query_type, dict) else None) or None

    return ParsedIntrospection(types=types, query_type_name=query_type_name)


def resolve_base_name(type_ref: Optional[dict[str, Any]]) -> Optional[str]:
    """Strip LIST/NON_NULL wrappers from a type reference and return the named type."""
    while type_ref is not None:
        if type_ref.get("kind") not in WRAPPER_KINDS:
            return type_ref.get("name")
        type_ref = type_ref.get("ofType")
    return None


def introspection_from_sdl(source: str) -> dict:
    """
    Build an introspection document from SDL text.

    Args:
        source: Schema definition language source

    Returns:
        Introspection document in {"data": {"__schema": {...}}} form

    Raises:
        GraphQLError: If the SDL is syntactically invalid
    """
    schema = build_schema(source)
    return {"data": introspection_from_schema(schema)}
