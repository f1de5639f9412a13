import logging
import random
import uuid
from typing import Any, Mapping, Tuple, Union

from pydantic import ValidationError

from .errors import InvalidImport, InvalidNode, InvariantViolation, NotFound
from .models import SkillGraph, SkillNode

logger = logging.getLogger(__name__)

DEFAULT_NODE_ID = "start"

# New nodes are scattered around this point so they do not stack.
NEW_NODE_POSITION = (450, 300)
NEW_NODE_SPREAD = 50

# Backup-file keys (xp, requires, path, isMajor) -> field names.
_FIELD_NAMES = {
    field.alias: name for name, field in SkillNode.model_fields.items() if field.alias
}

# Every operation takes a snapshot and returns a new one; the input is never modified.
# A failed operation raises before anything is built, so the caller keeps its snapshot.


def reset_to_default() -> SkillGraph:
    """Returns the canonical single-node starting graph."""
    start = SkillNode(
        id=DEFAULT_NODE_ID,
        name="Starting Point",
        description="Your journey begins here",
        reward_value=0,
        x=450,
        y=500,
    )
    return SkillGraph(nodes={start.id: start})


def get_node(graph: SkillGraph, node_id: str) -> SkillNode:
    node = graph.get(node_id)
    if node is None:
        raise NotFound(node_id)
    return node


def _replace_node(graph: SkillGraph, node: SkillNode) -> SkillGraph:
    nodes = dict(graph.nodes)
    nodes[node.id] = node
    return SkillGraph(nodes=nodes)


def _new_node_id(graph: SkillGraph) -> str:
    while True:
        node_id = f"node-{uuid.uuid4().hex}"
        if node_id not in graph:
            return node_id


# --- Create ---


def create_node(graph: SkillGraph, **fields) -> Tuple[SkillGraph, str]:
    """
    Inserts a new node with a generated id and no prerequisites.
    Optional fields (name, position, ...) override the defaults.
    """
    node_id = _new_node_id(graph)
    fields = _field_names(fields)
    fields.pop("id", None)
    fields.pop("prerequisite_ids", None)
    for axis, center in zip(("x", "y"), NEW_NODE_POSITION):
        if fields.get(axis) is None:
            fields[axis] = center + random.uniform(-NEW_NODE_SPREAD, NEW_NODE_SPREAD)
    node = _validate_node({**fields, "id": node_id})
    logger.debug("Created node %s", node_id)
    return _replace_node(graph, node), node_id


# --- Update ---


def _field_names(fields: Mapping[str, Any]) -> dict:
    return {_FIELD_NAMES.get(key, key): value for key, value in fields.items()}


def _validate_node(data: Mapping[str, Any]) -> SkillNode:
    try:
        return SkillNode.model_validate(data)
    except ValidationError as e:
        raise InvalidNode(f"Invalid node: {e}") from e


def update_node(graph: SkillGraph, node_id: str, **changes: Any) -> SkillGraph:
    """
    Merges the given fields into a node. Backup-file keys (``requires``, ``xp``, ...)
    are accepted as well as field names.
    The id cannot change and a node can never require itself; both are ignored.
    Raises InvalidNode if a value does not validate.
    """
    node = get_node(graph, node_id)
    changes = _field_names(changes)
    changes.pop("id", None)
    if "prerequisite_ids" in changes:
        prerequisite_ids = changes["prerequisite_ids"] or ()
        if isinstance(prerequisite_ids, str):
            raise InvalidNode("prerequisite_ids must be a sequence of node ids, not a string")
        # Keep the first occurrence of each id, drop the node's own id.
        changes["prerequisite_ids"] = tuple(
            prereq_id for prereq_id in dict.fromkeys(prerequisite_ids) if prereq_id != node_id
        )
    updated = _validate_node({**node.model_dump(), **changes})
    logger.debug("Updated node %s: %s", node_id, sorted(changes))
    return _replace_node(graph, updated)


def move_node(graph: SkillGraph, node_id: str, x: float, y: float) -> SkillGraph:
    """Stores new coordinates for a node. The engine never reads them."""
    node = get_node(graph, node_id)
    return _replace_node(graph, node.model_copy(update={"x": x, "y": y}))


def connect(graph: SkillGraph, prerequisite_id: str, dependent_id: str) -> SkillGraph:
    """
    Makes dependent_id require prerequisite_id.
    Self-loops and duplicate edges are ignored. Cycles are allowed.
    """
    get_node(graph, prerequisite_id)
    dependent = get_node(graph, dependent_id)
    if prerequisite_id == dependent_id or dependent.depends_on(prerequisite_id):
        return graph

    updated = dependent.model_copy(
        update={"prerequisite_ids": dependent.prerequisite_ids + (prerequisite_id,)}
    )
    logger.debug("Connected %s -> %s", prerequisite_id, dependent_id)
    return _replace_node(graph, updated)


def disconnect(graph: SkillGraph, prerequisite_id: str, dependent_id: str) -> SkillGraph:
    """Removes the edge prerequisite_id -> dependent_id if it exists."""
    dependent = graph.get(dependent_id)
    if dependent is None or not dependent.depends_on(prerequisite_id):
        return graph

    remaining = tuple(p for p in dependent.prerequisite_ids if p != prerequisite_id)
    logger.debug("Disconnected %s -> %s", prerequisite_id, dependent_id)
    return _replace_node(graph, dependent.model_copy(update={"prerequisite_ids": remaining}))


# --- Delete ---


def delete_node(graph: SkillGraph, node_id: str) -> SkillGraph:
    """
    Deletes a node and removes it from every other node's prerequisites,
    so no dangling edge survives the deletion.
    """
    if len(graph) <= 1:
        raise InvariantViolation("Can't delete the last node")
    if node_id not in graph:
        return graph

    nodes = {}
    for key, node in graph.nodes.items():
        if key == node_id:
            continue
        if node.depends_on(node_id):
            node = node.model_copy(
                update={"prerequisite_ids": tuple(p for p in node.prerequisite_ids if p != node_id)}
            )
        nodes[key] = node
    logger.debug("Deleted node %s", node_id)
    return SkillGraph(nodes=nodes)


# --- Replace ---


def replace_graph(new_graph: Union[SkillGraph, Mapping[str, Any]]) -> SkillGraph:
    """
    Validates a whole replacement graph, given as a snapshot or as a mapping
    of node id -> node data, and returns it as the new snapshot.
    """
    if isinstance(new_graph, SkillGraph):
        new_graph = new_graph.nodes
    if isinstance(new_graph, Mapping):
        new_graph = dict(new_graph)
    try:
        graph = SkillGraph.model_validate({"nodes": new_graph})
    except ValidationError as e:
        raise InvalidImport(f"Invalid skill tree: {e}") from e
    logger.debug("Replaced graph with %d nodes", len(graph))
    return graph
