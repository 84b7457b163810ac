import pytest

from xml_navigator.core.document import DocumentSource
from xml_navigator.core.exceptions import QuerySyntaxError
from xml_navigator.core.models import DocumentNode, NodeKind
from xml_navigator.core.query import XPathEvaluator


@pytest.fixture
def evaluator():
    return XPathEvaluator()


def test_element_results_in_document_order(evaluator, sample_document):
    matches = evaluator.evaluate("//title", sample_document)
    assert [m.children[0].text for m in matches] == ["Dune", "Emma"]
    assert all(m.kind is NodeKind.ELEMENT for m in matches)


def test_text_results_map_to_text_nodes(evaluator):
    doc = DocumentSource().load_string("<a>lead<b/>tail</a>")
    a = doc.children[0]

    texts = evaluator.evaluate("/a/text()", doc)
    assert texts == [a.children[0], a.children[2]]
    assert all(t.kind is NodeKind.TEXT for t in texts)


def test_attribute_results_map_to_owner_element(evaluator, sample_document):
    matches = evaluator.evaluate("//book/@id", sample_document)
    books = sample_document.children[-1].children
    assert matches == list(books)


def test_comment_and_pi_results(evaluator, sample_document):
    comments = evaluator.evaluate("//comment()", sample_document)
    assert [c.kind for c in comments] == [NodeKind.COMMENT]
    pis = evaluator.evaluate("//processing-instruction('render')", sample_document)
    assert [p.target for p in pis] == ["render"]


def test_no_matches_returns_empty_list(evaluator, sample_document):
    assert evaluator.evaluate("//missing", sample_document) == []


def test_malformed_expression_raises(evaluator, sample_document):
    with pytest.raises(QuerySyntaxError) as info:
        evaluator.evaluate("//book[", sample_document)
    assert "Failed to evaluate the XPath expression" in str(info.value)
    assert info.value.query == "//book["


def test_scalar_expression_raises(evaluator, sample_document):
    with pytest.raises(QuerySyntaxError):
        evaluator.evaluate("count(//book)", sample_document)


def test_tree_not_built_from_xml_is_rejected(evaluator):
    doc = DocumentNode.document([DocumentNode.element("a")])
    with pytest.raises(QuerySyntaxError):
        evaluator.evaluate("//a", doc)


def test_document_node_is_not_a_match(evaluator, sample_document):
    # lxml drops the document node from node-set results
    assert evaluator.evaluate("/", sample_document) == []
    assert evaluator.evaluate("/catalog", sample_document) == [sample_document.children[-1]]
