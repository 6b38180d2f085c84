import pytest


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def wrap(kind, inner):
    return {"kind": kind, "name": None, "ofType": inner}


def field(name, type_ref, description=None):
    return {"name": name, "description": description, "type": type_ref, "isDeprecated": False}


def obj(name, fields=None, interfaces=None, kind="OBJECT", **extra):
    return {
        "kind": kind,
        "name": name,
        "description": None,
        "fields": fields,
        "interfaces": interfaces,
        "possibleTypes": None,
        **extra,
    }


def document(types, query_type="Query"):
    return {
        "data": {
            "__schema": {
                "queryType": {"name": query_type} if query_type else None,
                "types": types,
            }
        }
    }


@pytest.fixture
def device_schema():
    """Query -> DeviceType -> CableType, with ID declared."""
    return document(
        [
            obj("Query", [field("device", named("OBJECT", "DeviceType"))]),
            obj(
                "DeviceType",
                [
                    field("id", wrap("NON_NULL", named("SCALAR", "ID")), "Primary key"),
                    field("cable", named("OBJECT", "CableType")),
                ],
            ),
            obj("CableType", [field("id", wrap("NON_NULL", named("SCALAR", "ID")))]),
            {"kind": "SCALAR", "name": "ID", "description": "Identifier"},
            obj("__Schema", [field("types", named("OBJECT", "__Type"))]),
            obj("__Type", [field("name", named("SCALAR", "String"))]),
        ]
    )


@pytest.fixture
def rich_schema():
    """Schema exercising interfaces, unions, relay types, cycles and missing types."""
    return document(
        [
            obj(
                "Query",
                [
                    field("node", named("INTERFACE", "Node")),
                    field("search", wrap("LIST", named("UNION", "SearchResult"))),
                    field("devices", named("OBJECT", "DeviceTypeConnection")),
                    field("site", named("OBJECT", "SiteType")),
                    field("status", named("ENUM", "StatusChoices")),
                ],
            ),
            obj("Node", [field("id", wrap("NON_NULL", named("SCALAR", "ID")))], kind="INTERFACE"),
            {
                "kind": "UNION",
                "name": "SearchResult",
                "fields": None,
                "interfaces": None,
                "possibleTypes": [named("OBJECT", "SiteType"), named("OBJECT", "RackType")],
            },
            obj(
                "DeviceTypeConnection",
                [
                    field("pageInfo", wrap("NON_NULL", named("OBJECT", "PageInfo"))),
                    field("edges", wrap("NON_NULL", wrap("LIST", named("OBJECT", "DeviceTypeEdge")))),
                ],
            ),
            obj("DeviceTypeEdge", [field("node", named("OBJECT", "DeviceType"))]),
            obj("PageInfo", [field("hasNextPage", named("SCALAR", "Boolean"))]),
            obj(
                "DeviceType",
                [
                    field("id", wrap("NON_NULL", named("SCALAR", "ID"))),
                    field("site", named("OBJECT", "SiteType")),
                    field("location", named("OBJECT", "LocationType")),
                ],
                interfaces=[named("INTERFACE", "Node")],
            ),
            obj(
                "SiteType",
                [
                    field("id", wrap("NON_NULL", named("SCALAR", "ID"))),
                    field("devices", wrap("LIST", named("OBJECT", "DeviceType"))),
                ],
                interfaces=[named("INTERFACE", "Node")],
            ),
            obj("RackType", [field("name", named("SCALAR", "String"))]),
            {"kind": "ENUM", "name": "StatusChoices", "enumValues": [{"name": "ACTIVE"}]},
            {"kind": "SCALAR", "name": "ID"},
            {"kind": "SCALAR", "name": "String"},
            {"kind": "SCALAR", "name": "Boolean"},
            obj("OrphanType", [field("name", named("SCALAR", "String"))]),
        ]
    )
