"""Type node creation with classification flags computed once."""

from dataclasses import dataclass
from typing import Literal, Optional

from .parser import META_PREFIX, resolve_base_name

TypeKind = Literal["SCALAR", "OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT", "LIST", "NON_NULL"]

BUILT_IN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})
COMPOSITE_KINDS = frozenset({"OBJECT", "INTERFACE", "UNION"})
RELAY_SUFFIXES = ("Connection", "Edge")
UNKNOWN_TYPE = "Unknown"


@dataclass(frozen=True)
class FieldInfo:
    """Simplified field: name plus unwrapped type name."""

    name: str
    type_name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class TypeNode:
    """Canonical, immutable node for one schema type."""

    name: str
    kind: TypeKind
    is_composite: bool
    is_relay: bool
    is_built_in: bool
    fields: Optional[tuple[FieldInfo, ...]] = None
    interfaces: Optional[tuple[str, ...]] = None
    possible_types: Optional[tuple[str, ...]] = None
    description: Optional[str] = None


def create_type_node(type_data: dict) -> TypeNode:
    """
    Create a TypeNode from a raw introspection type record.

    Args:
        type_data: Introspection type record (must carry name and kind)

    Returns:
        TypeNode with metadata flags and simplified fields
    """
    name = type_data["name"]
    kind = type_data["kind"]

    return TypeNode(
        name=name,
        kind=kind,
        is_composite=kind in COMPOSITE_KINDS,
        is_relay=name.endswith(RELAY_SUFFIXES) or name == "PageInfo",
        is_built_in=name.startswith(META_PREFIX) or name in BUILT_IN_SCALARS,
        fields=_extract_fields(type_data),
        interfaces=_resolve_names(type_data.get("interfaces")),
        possible_types=_resolve_names(type_data.get("possibleTypes")),
        description=type_data.get("description"),
    )


def _extract_fields(type_data: dict) -> Optional[tuple[FieldInfo, ...]]:
    # Zero declared fields is reported the same as no fields at all
    raw_fields = type_data.get("fields")
    if not raw_fields:
        return None

    return tuple(
        FieldInfo(
            name=f["name"],
            type_name=resolve_base_name(f.get("type")) or UNKNOWN_TYPE,
            description=f.get("description"),
        )
        for f in raw_fields
    )


def _resolve_names(refs: Optional[list]) -> Optional[tuple[str, ...]]:
    if refs is None:
        return None
    names = (resolve_base_name(ref) for ref in refs)
    return tuple(n for n in names if n is not None)
