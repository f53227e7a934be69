"""Concept node and connection models - the domain graph fed to the engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeType(str, Enum):
    """Semantic type of a concept node."""

    CONCEPT = "concept"
    SKILL = "skill"
    TOPIC = "topic"
    COURSE = "course"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "NodeType":
        """Parse a raw type string, falling back to OTHER for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


class ConnectionType(str, Enum):
    """Semantic type of a connection between two concepts."""

    PREREQUISITE = "prerequisite"
    RELATED = "related"
    BUILDS_ON = "builds_on"
    SIMILAR = "similar"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "ConnectionType":
        """Parse a raw type string, falling back to OTHER for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ConceptNode:
    """
    A learning concept supplied by the course/roadmap service.

    Examples: "JavaScript basics" (concept), "React" (skill)
    """

    id: str
    title: str
    type: NodeType = NodeType.CONCEPT
    metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConceptNode":
        """Create from a service payload."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            type=NodeType.parse(data.get("type", NodeType.OTHER)),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True)
class Connection:
    """
    A typed, directed edge between two concepts.

    Example: JavaScript basics --prerequisite--> React (strength: 0.9)
    Strength is informational only and never affects layout.
    """

    id: str
    from_node_id: str
    to_node_id: str
    type: ConnectionType = ConnectionType.RELATED
    strength: float = 0.5  # 0.0 - 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.strength <= 1.0:
            raise ValueError(f"Connection strength must be in [0, 1]: {self.strength}")

    @property
    def is_self_loop(self) -> bool:
        return self.from_node_id == self.to_node_id

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "from_node_id": self.from_node_id,
            "to_node_id": self.to_node_id,
            "type": self.type.value,
            "strength": self.strength,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Connection":
        """Create from a service payload (accepts camelCase endpoint keys)."""
        from_id = data.get("from_node_id", data.get("fromNodeId"))
        to_id = data.get("to_node_id", data.get("toNodeId"))
        if from_id is None or to_id is None:
            raise KeyError(f"Connection {data.get('id')!r} is missing an endpoint")
        return cls(
            id=str(data["id"]),
            from_node_id=str(from_id),
            to_node_id=str(to_id),
            type=ConnectionType.parse(data.get("type", ConnectionType.OTHER)),
            strength=float(data.get("strength", 0.5)),
        )
