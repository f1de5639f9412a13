import logging
from typing import List, NamedTuple

from . import store
from .models import SkillGraph
from .status import NodeStatus, node_status

logger = logging.getLogger(__name__)


class ToggleResult(NamedTuple):
    graph: SkillGraph
    toggled: bool
    completed: bool
    reward_granted: int


class Connection(NamedTuple):
    prerequisite_id: str
    dependent_id: str


def can_toggle(graph: SkillGraph, node_id: str) -> bool:
    """A node can be (un)completed unless it is locked."""
    node = store.get_node(graph, node_id)
    return node_status(graph, node) != NodeStatus.LOCKED


def toggle_completion(graph: SkillGraph, node_id: str) -> ToggleResult:
    """
    Flips the completed flag of a node.

    Locked nodes are left untouched. Completing a node grants its reward;
    un-completing it grants nothing and does not take the reward back.
    """
    node = store.get_node(graph, node_id)
    if node_status(graph, node) == NodeStatus.LOCKED:
        return ToggleResult(graph, False, node.completed, 0)

    completed = not node.completed
    graph = store.update_node(graph, node_id, completed=completed)
    reward = node.reward_value if completed else 0
    if completed:
        logger.info("Node %s achieved (+%d)", node_id, reward)
    return ToggleResult(graph, True, completed, reward)


def total_reward(graph: SkillGraph) -> int:
    return sum(node.reward_value for node in graph.nodes.values() if node.completed)


def completed_count(graph: SkillGraph) -> int:
    return sum(1 for node in graph.nodes.values() if node.completed)


def connections(graph: SkillGraph) -> List[Connection]:
    """Every edge whose prerequisite is present in the graph."""
    result = []
    for node in graph.nodes.values():
        for prereq_id in node.prerequisite_ids:
            if prereq_id in graph:
                result.append(Connection(prereq_id, node.id))
    return result
