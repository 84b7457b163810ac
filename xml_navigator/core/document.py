from __future__ import annotations

"""XML document source backed by lxml.

Parses a file into the navigator's :class:`DocumentNode` tree. lxml folds
character data into ``.text`` / ``.tail`` strings; the builder turns each of
those into a distinct text node so every piece of content gets its own row in
the tree view. Each node keeps the lxml object it came from in ``source`` so
XPath results can be traced back to navigator nodes.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree as ET

from xml_navigator.core.exceptions import DocumentLoadError, DocumentSaveError
from xml_navigator.core.models import DocumentNode

logger = logging.getLogger(__name__)

__all__ = ["DocumentSource", "build_document", "TEXT_SLOT", "TAIL_SLOT"]

TEXT_SLOT = "text"
TAIL_SLOT = "tail"


class DocumentSource:
    """Load and save XML documents.

    Parameters
    ----------
    discard_whitespace : bool
        When True, whitespace-only text between elements is dropped while
        parsing (formatting indentation does not show up as tree rows).
    """

    def __init__(self, discard_whitespace: bool = True) -> None:
        self.discard_whitespace = discard_whitespace
        self.path: Optional[Path] = None
        self._tree: Optional[ET._ElementTree] = None
        self.logger = logging.getLogger(f"{__name__}.DocumentSource")

    # --------------------------------------------------------------------- API

    def load(self, path: Union[str, Path]) -> DocumentNode:
        """Parse ``path`` and return the document root node.

        Raises
        ------
        DocumentLoadError
            If the file cannot be read or is not well-formed XML.
        """
        file_path = Path(path)
        parser = self._make_parser()
        try:
            tree = ET.parse(str(file_path), parser)
        except OSError as exc:
            raise DocumentLoadError(f"Failed to open the XML document:\n\n{exc}", file_path, exc) from exc
        except ET.XMLSyntaxError as exc:
            raise DocumentLoadError(f"Failed to open the XML document:\n\n{exc}", file_path, exc) from exc

        self.path = file_path
        self._tree = tree
        root = build_document(tree)
        self.logger.info("Loaded %s (%d nodes)", file_path, sum(1 for _ in root.iter()))
        return root

    def load_string(self, text: Union[str, bytes]) -> DocumentNode:
        """Parse an in-memory document and return its root node."""
        parser = self._make_parser()
        data = text.encode("utf-8") if isinstance(text, str) else text
        try:
            element = ET.fromstring(data, parser)
        except ET.XMLSyntaxError as exc:
            raise DocumentLoadError(f"Failed to parse the XML document:\n\n{exc}", None, exc) from exc
        tree = element.getroottree()
        self.path = None
        self._tree = tree
        return build_document(tree)

    def new(self, root_name: str = "root") -> DocumentNode:
        """Start an unsaved document holding a single empty root element."""
        tree = ET.ElementTree(ET.Element(root_name))
        self.path = None
        self._tree = tree
        return build_document(tree)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Serialize the loaded document to ``path`` (defaults to its source path)."""
        if self._tree is None:
            raise DocumentSaveError("No document is loaded", path)
        target = Path(path) if path is not None else self.path
        if target is None:
            raise DocumentSaveError("No file name was given for the document", None)
        docinfo = self._tree.docinfo
        try:
            xml_bytes = ET.tostring(
                self._tree,
                xml_declaration=True,
                encoding=docinfo.encoding or "UTF-8",
            )
            with open(target, "wb") as fh:
                fh.write(xml_bytes)
        except (OSError, ValueError) as exc:
            raise DocumentSaveError(f"Failed to save the XML document:\n\n{exc}", target, exc) from exc
        self.path = target
        self.logger.info("Saved %s", target)
        return target

    def close(self) -> None:
        self.path = None
        self._tree = None

    @property
    def is_loaded(self) -> bool:
        return self._tree is not None

    # --------------------------------------------------------------- Internal

    def _make_parser(self) -> ET.XMLParser:
        return ET.XMLParser(
            remove_blank_text=self.discard_whitespace,
            resolve_entities=False,
            strip_cdata=False,
        )


# ---------------------------------------------------------------------------
# Tree building
# ---------------------------------------------------------------------------

def build_document(tree: ET._ElementTree) -> DocumentNode:
    """Convert an lxml tree into a :class:`DocumentNode` hierarchy."""
    root_element = tree.getroot()
    document = DocumentNode.document(source=tree)

    doctype = tree.docinfo.doctype
    if doctype:
        document.append(DocumentNode.doctype(doctype, source=tree.docinfo))

    for sibling in reversed(list(root_element.itersiblings(preceding=True))):
        document.append(_build_node(sibling))
    document.append(_build_node(root_element))
    for sibling in root_element.itersiblings():
        document.append(_build_node(sibling))
    return document


def _build_node(item: ET._Element) -> DocumentNode:
    if isinstance(item, ET._Comment):
        return DocumentNode.comment(item.text or "", source=item)
    if isinstance(item, ET._ProcessingInstruction):
        return DocumentNode.processing_instruction(
            item.target,
            list(item.attrib.items()),
            text=item.text or "",
            source=item,
        )
    if isinstance(item, ET._Entity):
        return DocumentNode.text_node(item.text or "", source=item)

    node = DocumentNode.element(_qualified_name(item, item.tag), _attributes(item), source=item)
    if item.text is not None:
        node.append(DocumentNode.text_node(item.text, source=(item, TEXT_SLOT)))
    for child in item:
        node.append(_build_node(child))
        if child.tail is not None:
            node.append(DocumentNode.text_node(child.tail, source=(child, TAIL_SLOT)))
    return node


def _attributes(element: ET._Element) -> List[Tuple[str, str]]:
    """Return namespace declarations made on ``element`` followed by its attributes."""
    result: List[Tuple[str, str]] = []
    parent = element.getparent()
    inherited: Dict[Optional[str], str] = dict(parent.nsmap) if parent is not None else {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            result.append(("xmlns" if prefix is None else f"xmlns:{prefix}", uri))
    for key, value in element.attrib.items():
        result.append((_qualified_name(element, key, attribute=True), value))
    return result


def _qualified_name(element: ET._Element, name: str, attribute: bool = False) -> str:
    """Render a Clark-notation name with the prefix used in the document."""
    if not name.startswith("{"):
        return name
    qname = ET.QName(name)
    if qname.namespace == "http://www.w3.org/XML/1998/namespace":
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if uri == qname.namespace:
            if prefix is None:
                # Default namespaces never apply to attributes
                if attribute:
                    continue
                return qname.localname
            return f"{prefix}:{qname.localname}"
    return qname.localname
