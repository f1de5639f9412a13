from enum import Enum
from types import MappingProxyType
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathCategory(str, Enum):
    """The path a node belongs to. Only used to pick a display color."""

    BUSINESS = "business"
    CONTENT = "content"
    TREASURY = "treasury"
    FREEDOM = "freedom"
    INCOME = "income"
    RELATIONSHIP = "relationship"
    HEALTH = "health"
    LEARNING = "learning"
    CONVERGENCE = "convergence"
    ULTIMATE = "ultimate"
    DEFAULT = "default"


class SkillNode(BaseModel):
    """Represents a single achievement in the skill tree.

    Field aliases match the backup file format (``xp``, ``requires``, ``path``,
    ``isMajor``), so a node can be validated straight from an exported document.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = "New Node"
    description: str = "Click to edit"
    reward_value: int = Field(default=100, ge=0, alias="xp")

    # Ids of the nodes that must be completed before this one.
    prerequisite_ids: Tuple[str, ...] = Field(default=(), alias="requires")

    category: PathCategory = Field(default=PathCategory.DEFAULT, alias="path")
    completed: bool = False
    emphasized: bool = Field(default=False, alias="isMajor")

    # Owned by the presentation layer, stored as-is.
    x: float = 450
    y: float = 300

    @field_validator("prerequisite_ids", mode="before")
    @classmethod
    def default_missing_prerequisites(cls, value):
        return () if value is None else value

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def depends_on(self, node_id: str) -> bool:
        return node_id in self.prerequisite_ids


class SkillGraph(BaseModel):
    """An immutable snapshot of the whole tree: node id -> SkillNode.

    Edges are not stored separately; an edge P -> D exists when ``D.prerequisite_ids``
    contains ``P``. ``nodes`` is a read-only mapping; build a new graph to change it.
    Construction fails if the mapping is empty, if a key differs from
    its node's id, or if a node lists itself as a prerequisite.
    """

    model_config = ConfigDict(frozen=True)

    nodes: Dict[str, SkillNode]

    @field_validator("nodes", mode="after")
    @classmethod
    def freeze_nodes(cls, value):
        return MappingProxyType(value)

    @model_validator(mode="after")
    def check_invariants(self):
        if not self.nodes:
            raise ValueError("a skill graph must contain at least one node")
        for key, node in self.nodes.items():
            if key != node.id:
                raise ValueError(f"node stored under '{key}' has id '{node.id}'")
            if node.depends_on(node.id):
                raise ValueError(f"node '{node.id}' lists itself as a prerequisite")
        return self

    def __contains__(self, node_id):
        return node_id in self.nodes

    def __len__(self):
        return len(self.nodes)

    def get(self, node_id):
        return self.nodes.get(node_id)
