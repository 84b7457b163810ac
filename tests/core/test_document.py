import pytest

from xml_navigator.core.document import DocumentSource, TAIL_SLOT, TEXT_SLOT
from xml_navigator.core.exceptions import DocumentLoadError, DocumentSaveError
from xml_navigator.core.models import NodeKind


def _kinds(nodes):
    return [n.kind for n in nodes]


def test_sample_structure(sample_document):
    doc = sample_document
    assert doc.kind is NodeKind.DOCUMENT
    assert _kinds(doc.children) == [NodeKind.DOCTYPE, NodeKind.COMMENT, NodeKind.ELEMENT]

    doctype, comment, catalog = doc.children
    assert doctype.declaration == "<!DOCTYPE catalog>"
    assert comment.text == " inventory "
    assert catalog.name == "catalog"
    assert catalog.attributes == [("xmlns:x", "urn:extra")]

    book1, book2 = catalog.children
    assert book1.attributes == [("id", "b1"), ("x:shelf", "3")]
    assert [c.name for c in book1.children] == ["title", "price"]
    assert book1.children[0].children[0].text == "Dune"

    assert _kinds(book2.children) == [NodeKind.ELEMENT, NodeKind.PROCESSING_INSTRUCTION]
    pi = book2.children[1]
    assert pi.target == "render"
    assert pi.attributes == [("mode", "fast")]


def test_parents_are_linked(sample_document):
    catalog = sample_document.children[-1]
    title = catalog.children[0].children[0]
    assert title.parent.parent is catalog
    assert catalog.parent is sample_document
    assert sample_document.parent is None


def test_text_and_tail_become_distinct_text_nodes():
    doc = DocumentSource().load_string('<a x="1">lead<b/>text</a>')
    a = doc.children[0]
    assert _kinds(a.children) == [NodeKind.TEXT, NodeKind.ELEMENT, NodeKind.TEXT]
    lead, b, tail = a.children
    assert lead.text == "lead"
    assert tail.text == "text"
    assert lead.source == (a.source, TEXT_SLOT)
    assert tail.source == (b.source, TAIL_SLOT)


def test_whitespace_is_kept_when_not_discarded():
    doc = DocumentSource(discard_whitespace=False).load_string("<a>\n  <b/>\n</a>")
    a = doc.children[0]
    assert _kinds(a.children) == [NodeKind.TEXT, NodeKind.ELEMENT, NodeKind.TEXT]
    assert a.children[0].text.isspace()


def test_whitespace_is_dropped_when_discarded():
    doc = DocumentSource(discard_whitespace=True).load_string("<a>\n  <b/>\n</a>")
    assert _kinds(doc.children[0].children) == [NodeKind.ELEMENT]


def test_default_namespace_is_not_rendered_on_names():
    doc = DocumentSource().load_string('<r xmlns="urn:d" xmlns:p="urn:p"><p:c p:k="v" k2="w"/></r>')
    r = doc.children[0]
    assert r.name == "r"
    assert r.attributes == [("xmlns", "urn:d"), ("xmlns:p", "urn:p")]
    c = r.children[0]
    assert c.name == "p:c"
    assert c.attributes == [("p:k", "v"), ("k2", "w")]


def test_load_file_and_save_round_trip(sample_file, tmp_path):
    source = DocumentSource()
    doc = source.load(sample_file)
    assert source.is_loaded
    assert source.path == sample_file
    assert doc.children[-1].name == "catalog"

    out = tmp_path / "copy.xml"
    assert source.save(out) == out
    again = DocumentSource().load(out)
    assert again.children[-1].children[0].attributes == doc.children[-1].children[0].attributes


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(DocumentLoadError) as info:
        DocumentSource().load(tmp_path / "nope.xml")
    assert "Failed to open the XML document" in str(info.value)


def test_load_malformed_file_raises(tmp_path):
    bad = tmp_path / "bad.xml"
    bad.write_text("<a><b></a>", encoding="utf-8")
    source = DocumentSource()
    with pytest.raises(DocumentLoadError) as info:
        source.load(bad)
    assert info.value.path == bad
    assert not source.is_loaded


def test_save_without_document_raises(tmp_path):
    with pytest.raises(DocumentSaveError):
        DocumentSource().save(tmp_path / "x.xml")


def test_close_forgets_document(sample_file):
    source = DocumentSource()
    source.load(sample_file)
    source.close()
    assert not source.is_loaded
    assert source.path is None


def test_new_document_has_single_empty_root(tmp_path):
    source = DocumentSource()
    doc = source.new()

    assert source.is_loaded
    assert source.path is None
    (root,) = doc.children
    assert root.name == "root"
    assert root.children == []

    with pytest.raises(DocumentSaveError):
        source.save()
    assert source.save(tmp_path / "n.xml") == tmp_path / "n.xml"
