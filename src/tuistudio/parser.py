"""
Parser module for .tui documents.

Handles reading the editor's saved project files: a JSON envelope with a
format version, some metadata and the component tree itself.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from .models import ComponentNode

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1"


class ParseError(Exception):
    """Raised when a document cannot be parsed."""

    pass


@dataclass
class TuiDocument:
    """
    A saved design: the component tree plus its envelope metadata.

    Attributes:
        tree: Root of the component tree
        name: Document name (defaults to the root node's name)
        theme: Editor theme tag, passed through untouched
        saved_at: ISO-8601 timestamp of the last save, if known
        version: File format version
    """

    tree: ComponentNode
    name: str = ""
    theme: Optional[str] = None
    saved_at: Optional[str] = None
    version: str = FORMAT_VERSION

    def __post_init__(self):
        if not self.name:
            self.name = self.tree.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "meta": {"name": self.name, "theme": self.theme, "savedAt": self.saved_at},
            "tree": self.tree.to_dict(),
        }


class Parser:
    """Parses .tui document text into a TuiDocument."""

    def parse(self, text: str) -> TuiDocument:
        """
        Parse document text.

        Args:
            text: JSON text of a .tui file

        Returns:
            The parsed TuiDocument

        Raises:
            ParseError: If the text is not valid JSON, has the wrong version,
                has no tree, or contains malformed or duplicate nodes
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            self._reject(f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}")

        if not isinstance(data, dict):
            self._reject("Document must be a JSON object")

        version = data.get("version")
        if str(version) != FORMAT_VERSION:
            self._reject(f"Unsupported document version: {version!r}")

        tree = data.get("tree")
        if not isinstance(tree, dict):
            self._reject("Document has no component tree")

        self._check_tree(tree)

        meta = data.get("meta")
        if not isinstance(meta, dict):
            meta = {}

        theme = meta.get("theme")
        saved_at = meta.get("savedAt")
        return TuiDocument(
            tree=ComponentNode.from_dict(tree),
            name=str(meta.get("name") or ""),
            theme=theme if isinstance(theme, str) else None,
            saved_at=saved_at if isinstance(saved_at, str) else None,
            version=FORMAT_VERSION,
        )

    def _check_tree(self, tree: Dict[str, Any]) -> None:
        """Validate node shapes and id uniqueness before building nodes."""
        seen: Set[str] = set()
        stack: List[Any] = [tree]
        while stack:
            node = stack.pop()
            if not isinstance(node, dict):
                self._reject("Component node must be a JSON object")

            node_id = node.get("id")
            if node_id is None or node_id == "":
                self._reject("Component node is missing an id")
            node_id = str(node_id)
            if node_id in seen:
                self._reject(f"Duplicate node id: {node_id}")
            seen.add(node_id)

            children = node.get("children") or []
            if not isinstance(children, list):
                self._reject(f"Children of node {node_id} must be a list")
            stack.extend(reversed(children))

    @staticmethod
    def _reject(message: str) -> None:
        logger.warning("Rejected .tui document: %s", message)
        raise ParseError(message)


def parse_document(text: str) -> TuiDocument:
    """Parse .tui document text (see Parser.parse)."""
    return Parser().parse(text)


def load_document(path: Union[str, Path]) -> TuiDocument:
    """
    Read and parse a .tui file.

    Raises:
        ParseError: If the file content is not a valid document
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8")
    return parse_document(text)
