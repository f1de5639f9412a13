import json
import logging
from typing import Any, Mapping, Optional

from . import store
from .errors import InvalidImport
from .models import SkillGraph

logger = logging.getLogger(__name__)


def export_document(graph: SkillGraph) -> dict:
    """Returns the graph as a ``{"nodes": {...}}`` document in the backup file format."""
    return {
        "nodes": {
            node_id: node.model_dump(mode="json", by_alias=True)
            for node_id, node in graph.nodes.items()
        }
    }


def export_json(graph: SkillGraph, indent: Optional[int] = 2) -> str:
    return json.dumps(export_document(graph), indent=indent)


def import_document(document: Any) -> SkillGraph:
    """
    Validates an externally supplied document and returns the graph it describes.
    Raises InvalidImport if the document has no ``nodes`` or breaks a graph invariant.
    """
    if not isinstance(document, Mapping) or "nodes" not in document:
        raise InvalidImport("Invalid file format: missing 'nodes'")
    return store.replace_graph(document["nodes"])


def import_json(text: str) -> SkillGraph:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidImport(f"Invalid file format: {e}") from e
    return import_document(document)


def load_saved(text: Optional[str]) -> SkillGraph:
    """
    Loads a previously saved document, falling back to the default graph
    when nothing was saved or the saved document cannot be used.
    """
    if text is None:
        return store.reset_to_default()
    try:
        return import_json(text)
    except InvalidImport as e:
        logger.warning("Saved skill tree could not be loaded, using defaults: %s", e)
        return store.reset_to_default()
