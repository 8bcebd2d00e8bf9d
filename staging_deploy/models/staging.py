"""Staging server data models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any


class RepositoryState(Enum):
    """Staging repository lifecycle state as reported by the server"""
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"
    FAILED = "failed"


@dataclass(frozen=True)
class StagingProfile:
    """Profile entry of the staging server catalog"""

    id: str
    name: str = ""
    group_patterns: List[str] = field(default_factory=list, compare=False)
    artifact_patterns: List[str] = field(default_factory=list, compare=False)

    @property
    def display_name(self) -> str:
        """Get '<name> (<id>)' or just the id"""
        if self.name and self.name != self.id:
            return f"{self.name} ({self.id})"
        return self.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StagingProfile':
        """Create from dictionary"""
        match = data.get("match", {})
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            group_patterns=list(match.get("group", [])),
            artifact_patterns=list(match.get("artifact", [])),
        )


@dataclass(frozen=True)
class StagingRepository:
    """Remote repository opened for one staging transaction

    ``managed`` is True when the repository was created by this tool and
    False when the user pointed us at a pre-existing one.
    """

    profile: str
    repository_id: str
    managed: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "profile": self.profile,
            "repository_id": self.repository_id,
            "managed": self.managed,
        }
