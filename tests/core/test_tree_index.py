import pytest

from xml_navigator.core.exceptions import (
    DuplicateMappingError,
    InvariantViolation,
    UnmappedNodeError,
    UnmappedSlotError,
)
from xml_navigator.core.models import DocumentNode
from xml_navigator.core.tree_index import TreeIndex


def test_mappings_are_inverse():
    index = TreeIndex()
    a, b = DocumentNode.element("a"), DocumentNode.element("b")
    index.add_mapping("s1", a)
    index.add_mapping("s2", b)

    assert index.node_for("s1") is a
    assert index.slot_for(b) == "s2"
    assert len(index) == 2
    assert index.node_for(index.slot_for(a)) is a
    assert index.slot_for(index.node_for("s2")) == "s2"


def test_nodes_with_equal_content_are_distinct():
    index = TreeIndex()
    t1, t2 = DocumentNode.text_node("same"), DocumentNode.text_node("same")
    index.add_mapping(1, t1)
    index.add_mapping(2, t2)
    assert index.slot_for(t1) == 1
    assert index.slot_for(t2) == 2


def test_duplicate_slot_or_node_is_rejected():
    index = TreeIndex()
    a, b = DocumentNode.element("a"), DocumentNode.element("b")
    index.add_mapping(1, a)

    with pytest.raises(DuplicateMappingError):
        index.add_mapping(1, b)
    with pytest.raises(DuplicateMappingError):
        index.add_mapping(2, a)
    # Failed inserts leave the index untouched
    assert len(index) == 1
    assert not index.contains_node(b)
    assert not index.contains_slot(2)


def test_unmapped_lookups_raise():
    index = TreeIndex()
    with pytest.raises(UnmappedSlotError):
        index.node_for("missing")
    with pytest.raises(UnmappedNodeError) as info:
        index.slot_for(DocumentNode.element("a"))
    assert isinstance(info.value, InvariantViolation)
    assert isinstance(info.value, KeyError)


def test_clear_empties_and_bumps_generation():
    index = TreeIndex()
    a = DocumentNode.element("a")
    index.add_mapping(1, a)
    before = index.generation

    index.clear()

    assert len(index) == 0
    assert index.generation == before + 1
    # Same slot and node may be mapped again in the new generation
    index.add_mapping(1, a)
    assert index.node_for(1) is a
