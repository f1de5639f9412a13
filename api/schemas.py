from pydantic import BaseModel, Field
from typing import List, Optional

from skill_tree.models import PathCategory
from skill_tree.status import NodeStatus


class NodeCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    reward_value: Optional[int] = Field(default=None, ge=0)
    category: Optional[PathCategory] = None
    x: Optional[float] = Field(default=None, ge=0)
    y: Optional[float] = Field(default=None, ge=0)


class NodeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    reward_value: Optional[int] = Field(default=None, ge=0)
    prerequisite_ids: Optional[List[str]] = None
    category: Optional[PathCategory] = None
    emphasized: Optional[bool] = None


class NodePosition(BaseModel):
    # Coordinates are clamped to the canvas by the client; negative ones are rejected.
    x: float = Field(ge=0)
    y: float = Field(ge=0)


class Node(BaseModel):
    id: str
    name: str
    description: str
    reward_value: int
    prerequisite_ids: List[str]
    category: PathCategory
    completed: bool
    emphasized: bool
    x: float
    y: float
    status: NodeStatus


class ToggleResult(BaseModel):
    node: Node
    toggled: bool = Field(description="False when the node is locked and nothing changed.")
    reward_granted: int


class Connection(BaseModel):
    prerequisite_id: str
    dependent_id: str


class TreeStats(BaseModel):
    node_count: int
    completed_count: int
    total_reward: int
