import pytest

from schema_graph.graph import EdgeKind, extract_graph
from schema_graph.visualization import (
    DiagramFilter,
    clean_type_name,
    diagram_to_dict,
    filter_diagram,
    search_nodes,
    to_diagram,
)


@pytest.fixture
def rich_diagram(rich_schema):
    return to_diagram(extract_graph(rich_schema))


def test_one_diagram_node_and_edge_per_graph_item(rich_schema):
    graph = extract_graph(rich_schema)
    diagram = to_diagram(graph)

    assert [n.id for n in diagram.nodes] == list(graph.nodes)
    assert len(diagram.edges) == len(graph.edges)


def test_edge_ids_are_positional(device_schema):
    diagram = to_diagram(extract_graph(device_schema))

    assert [e.id for e in diagram.edges] == [
        "e-Query-DeviceType-0",
        "e-DeviceType-ID-1",
        "e-DeviceType-CableType-2",
        "e-CableType-ID-3",
    ]


def test_edge_labels_and_styles(rich_diagram):
    by_kind = {}
    for e in rich_diagram.edges:
        by_kind.setdefault(e.kind, e)

    field_edge = by_kind[EdgeKind.FIELD]
    assert field_edge.label == "node"
    assert field_edge.animated is True
    assert field_edge.style == {"stroke": "#2563eb", "strokeWidth": 2}

    implements = by_kind[EdgeKind.IMPLEMENTS]
    assert implements.label == "implements"
    assert implements.animated is False
    assert implements.style["strokeDasharray"] == "5,5"

    member = by_kind[EdgeKind.UNION_MEMBER]
    assert member.label == "member"
    assert member.style["strokeDasharray"] == "3,3"


@pytest.mark.parametrize(
    "name, label",
    [("DeviceType", "Device"), ("Type", "Type"), ("Query", "Query"), ("TypeAlias", "TypeAlias")],
)
def test_clean_type_name(name, label):
    assert clean_type_name(name) == label


def test_node_colors(rich_diagram):
    colors = {n.id: n.color for n in rich_diagram.nodes}

    assert colors["Query"] == "#2563eb"
    assert colors["Node"] == "#16a34a"
    assert colors["SearchResult"] == "#ea580c"
    assert colors["StatusChoices"] == "#9333ea"
    assert colors["ID"] == "#6b7280"


def test_grid_layout(device_schema):
    diagram = to_diagram(extract_graph(device_schema), layout="grid")
    assert [n.position for n in diagram.nodes] == [(0, 0), (250, 0), (0, 150), (250, 150)]


def test_hierarchical_layout(device_schema):
    diagram = to_diagram(extract_graph(device_schema), layout="hierarchical")
    positions = {n.id: n.position for n in diagram.nodes}

    assert positions == {
        "Query": (-125, 0),
        "DeviceType": (-125, 250),
        "ID": (-275, 500),
        "CableType": (25, 500),
    }


def test_hierarchical_layout_skips_dangling_targets(rich_schema):
    graph = extract_graph(rich_schema)
    diagram = to_diagram(graph, layout="hierarchical")

    assert sorted(n.id for n in diagram.nodes) == sorted(graph.nodes)


def test_unknown_layout(device_schema):
    with pytest.raises(ValueError):
        to_diagram(extract_graph(device_schema), layout="radial")


def test_filter_hides_builtins_and_relay(rich_diagram):
    filtered = filter_diagram(rich_diagram, DiagramFilter(hide_builtins=True, hide_relay=True))
    ids = {n.id for n in filtered.nodes}

    assert not ids & {"ID", "String", "Boolean", "PageInfo", "DeviceTypeConnection", "DeviceTypeEdge"}
    assert "DeviceType" in ids
    for e in filtered.edges:
        assert e.source in ids and e.target in ids


def test_filter_drops_dangling_edges(rich_diagram):
    filtered = filter_diagram(rich_diagram, DiagramFilter())

    assert not any(e.target == "LocationType" for e in filtered.edges)
    assert len(filtered.nodes) == len(rich_diagram.nodes)


def test_filter_by_edge_kind(rich_diagram):
    filtered = filter_diagram(rich_diagram, DiagramFilter(show_fields=False, show_unions=False))
    assert {e.kind for e in filtered.edges} == {EdgeKind.IMPLEMENTS}


def test_search_nodes(rich_diagram):
    assert search_nodes(rich_diagram, "device") == ["DeviceTypeConnection", "DeviceTypeEdge", "DeviceType"]
    assert search_nodes(rich_diagram, "  SITE ") == ["SiteType"]
    assert search_nodes(rich_diagram, "   ") == []
    assert search_nodes(rich_diagram, "nothing") == []


def test_diagram_to_dict(device_schema):
    data = diagram_to_dict(to_diagram(extract_graph(device_schema)))

    nodes = {n["id"]: n for n in data["nodes"]}
    device = nodes["DeviceType"]
    assert device["id"] == "DeviceType"
    assert device["data"]["label"] == "Device"
    assert device["data"]["fields"] == [
        {"name": "id", "typeName": "ID", "description": "Primary key"},
        {"name": "cable", "typeName": "CableType", "description": None},
    ]
    assert device["position"] == {"x": 250, "y": 0}
    assert nodes["ID"]["data"]["fields"] is None
    assert nodes["ID"]["data"]["description"] == "Identifier"

    edge = data["edges"][0]
    assert edge["edgeKind"] == "FIELD"
    assert edge["label"] == "device"
    assert edge["type"] == "smoothstep"
