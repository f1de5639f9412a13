from enum import Enum
from typing import Dict

from .errors import NotFound
from .models import SkillGraph, SkillNode


class NodeStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"
    UNSTABLE = "unstable"


def requirements_met(graph: SkillGraph, node: SkillNode) -> bool:
    """True when every direct prerequisite exists and is completed (vacuously for none)."""
    for prereq_id in node.prerequisite_ids:
        prereq = graph.get(prereq_id)
        if prereq is None or not prereq.completed:
            return False
    return True


def has_unstable_ancestor(graph: SkillGraph, node: SkillNode) -> bool:
    """
    Walks the prerequisite chain of a node depth-first and reports whether any
    prerequisite, direct or transitive, is missing or not completed.

    Each node is expanded at most once. A node reached a second time counts as
    stable, which keeps the walk finite on cyclic graphs.
    """
    visited = {node.id}
    stack = [node]

    while stack:
        current = stack.pop()
        for prereq_id in current.prerequisite_ids:
            prereq = graph.get(prereq_id)
            if prereq is None or not prereq.completed:
                return True
            if prereq_id not in visited:
                visited.add(prereq_id)
                stack.append(prereq)
    return False


def node_status(graph: SkillGraph, node: SkillNode) -> NodeStatus:
    """Derives the status of a node from the graph snapshot."""
    if node.completed:
        if has_unstable_ancestor(graph, node):
            return NodeStatus.UNSTABLE
        return NodeStatus.COMPLETED

    if requirements_met(graph, node):
        return NodeStatus.AVAILABLE
    return NodeStatus.LOCKED


def status_of(graph: SkillGraph, node_id: str) -> NodeStatus:
    node = graph.get(node_id)
    if node is None:
        raise NotFound(node_id)
    return node_status(graph, node)


def all_statuses(graph: SkillGraph) -> Dict[str, NodeStatus]:
    return {node_id: node_status(graph, node) for node_id, node in graph.nodes.items()}
