from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Dict, Hashable, Optional, Union

from xml_navigator.config import ConfigManager, SettingsStore, get_user_config_dir
from xml_navigator.core.document import DocumentSource
from xml_navigator.core.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    InvariantViolation,
    NoActiveSearchError,
    QuerySyntaxError,
    StaleResultError,
)
from xml_navigator.core.models import DocumentNode, Layout, ViewState
from xml_navigator.core.node_details import NodeProperties, PropertiesKind, describe_properties, node_path
from xml_navigator.core.query import QueryEvaluator, XPathEvaluator
from xml_navigator.core.services import (
    ProjectionBuilder,
    ProjectionSink,
    SearchNavigator,
    SearchOutcome,
    ViewStateStore,
)
from xml_navigator.core.summary import DEFAULT_MAX_SUMMARY_LENGTH, NodeSummarizer
from xml_navigator.core.tree_index import TreeIndex

logger = logging.getLogger(__name__)

__all__ = ["NavigatorController", "OperationResult", "NO_MATCHES_MESSAGE"]

NO_MATCHES_MESSAGE = "The query did not match any nodes"


@dataclass
class OperationResult:
    """Result of a controller operation.

    Attributes
    ----------
    success
        Whether the operation completed successfully.
    message
        Human-readable summary suitable for logs or UI display.
    slot
        Projection slot the operation selected, if any.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str = ""
    slot: Optional[Hashable] = None
    details: Optional[Dict[str, Any]] = None


class NavigatorController:
    """Coordinate document loading, projection, search and view state.

    The controller owns the engine pieces and the loaded document. It
    contains no UI toolkit code: the tree control is reached only through the
    :class:`ProjectionSink` protocol and dialogs are left to the caller.

    Parameters
    ----------
    sink : ProjectionSink
        Tree control the document is projected onto.
    config : ConfigManager, optional
        Source of configured defaults. The shared instance is used if omitted.
    settings : SettingsStore, optional
        Persisted settings. Defaults to the settings file in the user config
        directory.
    document_source : DocumentSource, optional
        Loader for documents.
    evaluator : QueryEvaluator, optional
        Query evaluator; XPath via lxml by default.

    Notes
    -----
    - Routine failures (unreadable file, bad query, no matches) come back as
      :class:`OperationResult` values with a user-facing message; methods do
      not raise into the UI event loop.
    - Refreshing the projection always resets the search navigator.
    """

    def __init__(
        self,
        sink: ProjectionSink,
        *,
        config: Optional[ConfigManager] = None,
        settings: Optional[SettingsStore] = None,
        document_source: Optional[DocumentSource] = None,
        evaluator: Optional[QueryEvaluator] = None,
    ) -> None:
        cfg = config if config is not None else ConfigManager()

        self.summarizer = NodeSummarizer(cfg.get_value("summary", "max_length", DEFAULT_MAX_SUMMARY_LENGTH))
        self.index = TreeIndex()
        self.projection = ProjectionBuilder(sink, self.index, self.summarizer)
        self.search = SearchNavigator(evaluator if evaluator is not None else XPathEvaluator())
        self.projection.add_refresh_listener(self.search.reset)

        self.view_store = ViewStateStore(
            default_column_width=cfg.get_value("view", "default_column_width", 100),
            column_count=cfg.get_value("view", "column_count", 2),
            max_recent_files=cfg.get_value("view", "max_recent_files", 4),
        )
        if settings is None:
            filename = cfg.get_value("settings", "filename", "settings.yml")
            settings = SettingsStore(get_user_config_dir() / filename)
        self.settings = settings

        self.source = document_source if document_source is not None else DocumentSource(
            discard_whitespace=bool(cfg.get_value("document", "discard_whitespace", True))
        )
        self._sink = sink
        self.root: Optional[DocumentNode] = None
        self.view_state: ViewState = ViewState(column_widths=self.view_store.normalize_column_widths(()))

    # ---------------------------------------------------------------------------------
    # View state
    # ---------------------------------------------------------------------------------

    def load_view_state(self) -> ViewState:
        """Read persisted settings into :attr:`view_state`."""
        self.settings.load()
        self.view_state = self.view_store.load(self.settings)
        self.search.last_query = self.view_state.last_query
        return self.view_state

    def save_view_state(self, **changes: Any) -> ViewState:
        """Merge ``changes`` into the view state and persist it."""
        self.view_state = self.view_state.with_changes(last_query=self.search.last_query, **changes)
        self.view_store.save(self.settings, self.view_state)
        self.settings.flush()
        return self.view_state

    def set_layout(self, layout: Layout) -> Layout:
        self.view_state = self.view_state.with_changes(layout=layout)
        logger.debug("Layout set to %s", layout.value)
        return layout

    # ---------------------------------------------------------------------------------
    # Document lifecycle
    # ---------------------------------------------------------------------------------

    @property
    def has_document(self) -> bool:
        return self.root is not None

    def open_document(self, path: Union[str, Path]) -> OperationResult:
        """Load ``path`` and project it. The previous document stays on failure."""
        try:
            root = self.source.load(path)
        except DocumentLoadError as exc:
            logger.error("Could not load %s: %s", path, exc)
            self.view_state = self.view_store.remove_recent_file(self.view_state, str(Path(path)))
            return OperationResult(False, str(exc), details={"path": str(path)})

        self.root = root
        slot = self.refresh()
        self.view_state = self.view_store.add_recent_file(self.view_state, str(Path(path)))
        return OperationResult(True, f"Opened {Path(path).name}", slot=slot)

    def show_document(self, root: DocumentNode) -> Optional[Hashable]:
        """Project an already-built document tree."""
        self.root = root
        return self.refresh()

    def new_document(self) -> OperationResult:
        """Replace the current document with an unsaved one holding an empty root."""
        root = self.source.new()
        self.root = root
        slot = self.refresh()
        return OperationResult(True, "Created a new document", slot=slot)

    @property
    def document_path(self) -> Optional[Path]:
        return self.source.path

    def save_document(self, path: Optional[Union[str, Path]] = None) -> OperationResult:
        """Write the current document to ``path``, or back to where it came from."""
        if self.root is None:
            return OperationResult(False, "No document is open")
        if path is None and self.source.path is None:
            return OperationResult(False, "The document has no file name", details={"needs_path": True})
        try:
            target = self.source.save(path)
        except DocumentSaveError as exc:
            logger.error("Could not save %s: %s", path or self.source.path, exc)
            return OperationResult(False, str(exc), details={"path": str(exc.path)})

        self.view_state = self.view_store.add_recent_file(self.view_state, str(target))
        return OperationResult(True, f"Saved {target.name}", details={"path": str(target)})

    def close_document(self) -> None:
        self.projection.clear()
        self.source.close()
        self.root = None

    def refresh(self) -> Optional[Hashable]:
        """Rebuild the projection of the current document."""
        if self.root is None:
            self.projection.clear()
            return None
        return self.projection.refresh(self.root)

    # ---------------------------------------------------------------------------------
    # Selection
    # ---------------------------------------------------------------------------------

    def node_for_slot(self, slot: Optional[Hashable]) -> Optional[DocumentNode]:
        if slot is None:
            return None
        try:
            return self.index.node_for(slot)
        except InvariantViolation:
            logger.error("Selection %r is not part of the current projection", slot, exc_info=True)
            return None

    def selected_node(self) -> Optional[DocumentNode]:
        return self.node_for_slot(self._sink.get_selection())

    def properties_for_slot(self, slot: Optional[Hashable]) -> NodeProperties:
        node = self.node_for_slot(slot)
        if node is None:
            return NodeProperties(PropertiesKind.NONE)
        return describe_properties(node)

    def selected_node_path(self) -> str:
        node = self.selected_node()
        return node_path(node) if node is not None else ""

    # ---------------------------------------------------------------------------------
    # Search
    # ---------------------------------------------------------------------------------

    def find(self, query: str) -> OperationResult:
        """Run a query and select its first match."""
        if self.root is None:
            return OperationResult(False, "No document is open")
        try:
            outcome = self.search.search(query, self.root)
        except QuerySyntaxError as exc:
            logger.info("Rejected query %r: %s", query, exc)
            return OperationResult(False, str(exc), details={"query": query})

        if outcome is SearchOutcome.NO_MATCHES:
            return OperationResult(False, NO_MATCHES_MESSAGE, details={"outcome": outcome})
        return self.find_next()

    def find_next(self) -> OperationResult:
        """Select the next match of the active search, wrapping around."""
        try:
            slot = self.search.next_slot(self.index)
        except NoActiveSearchError as exc:
            return OperationResult(False, str(exc))
        except StaleResultError as exc:
            return OperationResult(False, str(exc))

        self._sink.select(slot)
        return OperationResult(
            True,
            "",
            slot=slot,
            details={"count": self.search.match_count},
        )

    @property
    def last_query(self) -> str:
        return self.search.last_query
