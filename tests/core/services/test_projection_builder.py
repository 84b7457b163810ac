import pytest

from xml_navigator.core.document import DocumentSource
from xml_navigator.core.models import DocumentNode
from xml_navigator.core.services import ProjectionBuilder
from xml_navigator.core.summary import NodeSummarizer
from xml_navigator.core.tree_index import TreeIndex


@pytest.fixture
def builder(sink):
    return ProjectionBuilder(sink, TreeIndex(), NodeSummarizer(50))


def test_mixed_content_projection(builder, sink):
    doc = DocumentSource().load_string('<a x="1"><b/>text</a>')

    root_slot = builder.refresh(doc)

    assert sink.labels[root_slot] == "DOM"
    assert sink.flags[root_slot] is True
    (a_slot,) = sink.children[root_slot]
    assert sink.labels[a_slot] == 'a x="1"'
    assert sink.flags[a_slot] is True
    assert sink.child_labels(a_slot) == ["b ", "text"]
    assert [sink.flags[s] for s in sink.children[a_slot]] == [False, False]
    assert sink.selection == root_slot


def test_every_node_is_mapped_once(builder, sink, sample_document):
    builder.refresh(sample_document)
    index = builder.index

    nodes = list(sample_document.iter())
    assert len(index) == len(nodes) == len(sink.labels)
    for node in nodes:
        slot = index.slot_for(node)
        assert index.node_for(slot) is node


def test_sibling_order_matches_document_order(builder, sink, sample_document):
    builder.refresh(sample_document)
    index = builder.index
    for node in sample_document.iter():
        if not node.is_container:
            continue
        child_slots = sink.children[index.slot_for(node)]
        assert [index.node_for(s) for s in child_slots] == node.children


def test_slot_parentage_matches_node_parentage(builder, sink, sample_document):
    builder.refresh(sample_document)
    index = builder.index
    for node in sample_document.iter():
        parent_slot = sink.parents[index.slot_for(node)]
        if node.parent is None:
            assert parent_slot is None
        else:
            assert parent_slot == index.slot_for(node.parent)


def test_empty_document_has_root_only(builder, sink):
    root_slot = builder.refresh(DocumentNode.document())
    assert sink.labels == {root_slot: "DOM"}
    assert sink.flags[root_slot] is False
    assert sink.selection == root_slot


def test_refresh_replaces_previous_projection(builder, sink, sample_document):
    builder.refresh(sample_document)
    first_generation = builder.index.generation

    other = DocumentSource().load_string("<only/>")
    root_slot = builder.refresh(other)

    assert builder.index.generation == first_generation + 1
    assert len(builder.index) == 2
    assert sink.roots == [root_slot]
    assert not builder.index.contains_node(sample_document)


def test_listeners_run_before_index_is_cleared(builder, sink, sample_document):
    seen = []
    builder.refresh(sample_document)
    builder.add_refresh_listener(lambda: seen.append(len(builder.index)))

    builder.refresh(sample_document)

    assert seen == [len(list(sample_document.iter()))]


def test_labels_follow_summarizer_length(sink):
    builder = ProjectionBuilder(sink, TreeIndex(), NodeSummarizer(4))
    doc = DocumentNode.document([DocumentNode.element("r", children=[DocumentNode.text_node("abcdefgh")])])
    root_slot = builder.refresh(doc)
    (r_slot,) = sink.children[root_slot]
    assert sink.child_labels(r_slot) == ["abcd..."]


def test_clear_discards_projection(builder, sink, sample_document):
    calls = []
    builder.add_refresh_listener(lambda: calls.append("reset"))
    builder.refresh(sample_document)
    builder.clear()

    assert len(builder.index) == 0
    assert sink.labels == {}
    assert builder.root_slot is None
    assert calls == ["reset", "reset"]
