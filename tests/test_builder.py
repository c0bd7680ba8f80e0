from core.models import GraphLink
from graph.builder import BuildStats, GraphAssembler, add_link, add_node, build_graph, normalize_type
from graph.records import RawNodeRecord, RawRelationshipRecord


def _root(handle="n1", root_id=5, **props):
    return RawNodeRecord(handle=handle, label="Root", properties={"root_id": root_id, **props})


def _word(handle="n2", word_id=10, **props):
    return RawNodeRecord(handle=handle, label="Word", properties={"word_id": word_id, **props})


def test_normalize_type_rules():
    assert normalize_type("Root") == "root"
    assert normalize_type("CorpusItem") == "name"
    assert normalize_type("corpusitem") == "name"
    assert normalize_type("Lemma") == "lemma"
    assert normalize_type(normalize_type("CorpusItem")) == "name"


def test_add_node_builds_composite_id_and_registers_handle():
    nodes, identity_map = [], {}
    add_node(_root(arabic="ك-ت-ب"), "root_id", "Root", nodes, identity_map)
    assert len(nodes) == 1
    node = nodes[0]
    assert node.id == "root-5"
    assert node.type == "root"
    assert node.to_dict() == {"id": "root-5", "type": "root", "root_id": 5, "arabic": "ك-ت-ب"}
    assert identity_map["n1"] is node


def test_add_node_corpus_item_becomes_name():
    nodes, identity_map = [], {}
    record = RawNodeRecord(handle="c1", label="CorpusItem", properties={"item_id": 3})
    add_node(record, "item_id", "CorpusItem", nodes, identity_map)
    assert nodes[0].type == "name"
    assert nodes[0].id == "name-3"


def test_add_node_normalizes_two_word_ids():
    nodes, identity_map = [], {}
    add_node(_root(root_id={"low": 42, "high": 0}), "root_id", "Root", nodes, identity_map)
    assert nodes[0].id == "root-42"
    assert nodes[0].get("root_id") == 42


def test_add_node_skips_absent_and_falsy_ids():
    nodes, identity_map = [], {}
    stats = BuildStats()
    add_node(None, "root_id", "Root", nodes, identity_map, stats=stats)
    add_node(_root(root_id=None), "root_id", "Root", nodes, identity_map, stats=stats)
    add_node(RawNodeRecord("n3", "Root", {}), "root_id", "Root", nodes, identity_map, stats=stats)
    assert nodes == []
    assert identity_map == {}
    assert stats.nodes_skipped == 2


def test_add_node_zero_id_is_skipped_by_default():
    nodes, identity_map = [], {}
    add_node(_root(root_id=0), "root_id", "Root", nodes, identity_map)
    assert nodes == []


def test_add_node_zero_id_accepted_when_allowed():
    nodes, identity_map = [], {}
    add_node(_root(root_id=0), "root_id", "Root", nodes, identity_map, allow_zero_id=True)
    assert [n.id for n in nodes] == ["root-0"]


def test_add_node_repeated_handle_duplicates_without_strict():
    nodes, identity_map = [], {}
    add_node(_root(), "root_id", "Root", nodes, identity_map)
    add_node(_root(), "root_id", "Root", nodes, identity_map)
    assert [n.id for n in nodes] == ["root-5", "root-5"]
    assert identity_map["n1"] is nodes[1]


def test_add_node_repeated_handle_ignored_with_strict():
    nodes, identity_map = [], {}
    stats = BuildStats()
    add_node(_root(), "root_id", "Root", nodes, identity_map, strict=True, stats=stats)
    add_node(_root(), "root_id", "Root", nodes, identity_map, strict=True, stats=stats)
    assert len(nodes) == 1
    assert identity_map["n1"] is nodes[0]
    assert stats.duplicates == 1


def test_add_link_resolves_endpoints():
    nodes, identity_map, links = [], {}, []
    add_node(_root(), "root_id", "Root", nodes, identity_map)
    add_node(_word(), "word_id", "Word", nodes, identity_map)
    add_link(RawRelationshipRecord("HAS_WORD", "n1", "n2"), identity_map, links)
    assert links == [GraphLink(source="root-5", target="word-10", type="HAS_WORD")]


def test_add_link_uses_default_type():
    nodes, identity_map, links = [], {}, []
    add_node(_root(), "root_id", "Root", nodes, identity_map)
    add_node(_word(), "word_id", "Word", nodes, identity_map)
    add_link(RawRelationshipRecord(None, "n1", "n2"), identity_map, links, "RELATED")
    assert links[0].type == "RELATED"


def test_add_link_drops_unregistered_or_missing_endpoints():
    nodes, identity_map, links = [], {}, []
    stats = BuildStats()
    add_node(_word(), "word_id", "Word", nodes, identity_map)
    add_link(None, identity_map, links, stats=stats)
    add_link(RawRelationshipRecord("HAS_WORD", "ghost", "n2"), identity_map, links, stats=stats)
    add_link(RawRelationshipRecord("HAS_WORD", "n2", "ghost"), identity_map, links, stats=stats)
    add_link(RawRelationshipRecord("HAS_WORD", None, "n2"), identity_map, links, stats=stats)
    assert links == []
    assert stats.links_dropped == 3


def test_build_graph_end_to_end():
    relationship = RawRelationshipRecord("HAS_WORD", "n1", "n2")
    snapshot = build_graph([_root(), _word()], [relationship])
    assert snapshot.to_dict() == {
        "nodes": [
            {"id": "root-5", "type": "root", "root_id": 5},
            {"id": "word-10", "type": "word", "word_id": 10},
        ],
        "links": [{"source": "root-5", "target": "word-10", "type": "HAS_WORD"}],
    }


def test_build_graph_filtered_start_produces_no_links():
    relationship = RawRelationshipRecord("HAS_WORD", "n1", "n2")
    snapshot = build_graph([_root(root_id=None), _word()], [relationship])
    assert [n.id for n in snapshot.nodes] == ["word-10"]
    assert snapshot.links == []


def test_relationships_listed_before_nodes_still_resolve():
    relationship = RawRelationshipRecord("HAS_WORD", "n1", "n2")
    snapshot = build_graph([relationship, _root(), _word()])
    assert len(snapshot.links) == 1


def test_assembler_explicit_id_property_and_label():
    record = RawNodeRecord(handle="x", label="Anything", properties={"key": 9})
    snapshot, stats = GraphAssembler().assemble([record], id_property="key", type_label="Form")
    assert [n.id for n in snapshot.nodes] == ["form-9"]
    assert stats.nodes_added == 1


def test_assembler_skips_unknown_labels():
    record = RawNodeRecord(handle="x", label="Corpus", properties={"corpus_id": 1})
    snapshot, stats = GraphAssembler().assemble([record])
    assert snapshot.nodes == []
    assert stats.nodes_skipped == 1


def test_assembler_calls_share_no_state():
    assembler = GraphAssembler()
    first, _ = assembler.assemble([_root(), _word()])
    second, _ = assembler.assemble([], [RawRelationshipRecord("HAS_WORD", "n1", "n2")])
    assert len(first.nodes) == 2
    assert second.nodes == []
    assert second.links == []


def test_assembler_accepts_json_and_row_shaped_records():
    rows = [
        {
            "root": {"elementId": "4:a:1", "labels": ["Root"], "properties": {"root_id": {"low": 5, "high": 0}}},
            "word": {"elementId": "4:a:2", "labels": ["Word"], "properties": {"word_id": 10}},
            "etym": None,
        },
        {"type": "HAS_WORD", "startNodeElementId": "4:a:1", "endNodeElementId": "4:a:2"},
    ]
    snapshot, stats = GraphAssembler().assemble(rows)
    assert [n.id for n in snapshot.nodes] == ["root-5", "word-10"]
    assert [l.to_dict() for l in snapshot.links] == [{"source": "root-5", "target": "word-10", "type": "HAS_WORD"}]
    assert stats.to_dict() == {
        "nodes_added": 2,
        "nodes_skipped": 0,
        "duplicates": 0,
        "links_added": 1,
        "links_dropped": 0,
    }


def test_bool_id_renders_lowercase():
    nodes, identity_map = [], {}
    add_node(RawNodeRecord("b1", "Form", {"form_id": True}), "form_id", "Form", nodes, identity_map)
    assert nodes[0].id == "form-true"


def test_rows_with_start_and_end_columns_are_flattened():
    row = {
        "start": {"elementId": "4:s:1", "labels": ["Root"], "properties": {"root_id": 5}},
        "end": {"elementId": "4:s:2", "labels": ["Word"], "properties": {"word_id": 2}},
    }
    snapshot, _stats = GraphAssembler().assemble([row])
    assert [n.id for n in snapshot.nodes] == ["root-5", "word-2"]


def test_collected_list_columns_are_flattened():
    row = {
        "root": {"elementId": "4:c:1", "labels": ["Root"], "properties": {"root_id": 5}},
        "words": [
            {"elementId": "4:c:2", "labels": ["Word"], "properties": {"word_id": 2}},
            {"elementId": "4:c:3", "labels": ["Word"], "properties": {"word_id": 3}},
        ],
        "rels": [
            {"type": "HAS_WORD", "startNodeElementId": "4:c:1", "endNodeElementId": "4:c:2"},
            {"type": "HAS_WORD", "startNodeElementId": "4:c:1", "endNodeElementId": "4:c:3"},
        ],
    }
    snapshot, _stats = GraphAssembler().assemble([row])
    assert [n.id for n in snapshot.nodes] == ["root-5", "word-2", "word-3"]
    assert [(l.source, l.target) for l in snapshot.links] == [("root-5", "word-2"), ("root-5", "word-3")]
