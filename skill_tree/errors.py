class SkillTreeError(Exception):
    """Base class for every error raised by the skill tree engine."""


class NotFound(SkillTreeError, KeyError):
    """An operation referenced a node id that is not in the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self):
        return f"Node '{self.node_id}' not found"


class InvariantViolation(SkillTreeError):
    """An operation would leave the graph in an invalid state."""


class InvalidImport(SkillTreeError, ValueError):
    """A replacement document failed structural or invariant validation."""


class InvalidNode(SkillTreeError, ValueError):
    """Field values given for a node failed validation (e.g. a negative reward)."""
