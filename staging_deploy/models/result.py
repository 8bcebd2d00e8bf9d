"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any

from .staging import RepositoryState, StagingRepository


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    SKIPPED = "skipped"


class DeployMode(Enum):
    """How a module's deployables were routed"""
    SKIPPED = "skipped"
    DIRECT = "direct"
    STAGED = "staged"


@dataclass
class DeployedFile:
    """One file handed to the deployer or the local staging store"""

    coordinates: str
    source: Path
    target: str
    mode: DeployMode

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "coordinates": self.coordinates,
            "source": str(self.source),
            "target": self.target,
            "mode": self.mode.value,
        }


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus = OperationStatus.SUCCESS
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status


@dataclass
class ProfileCommitResult:
    """Outcome of committing one profile's staged content"""

    repository: StagingRepository
    uploaded: List[str] = field(default_factory=list)
    state: RepositoryState = RepositoryState.OPEN

    @property
    def profile_id(self) -> str:
        return self.repository.profile

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "repository": self.repository.to_dict(),
            "uploaded": list(self.uploaded),
            "state": self.state.value,
        }


@dataclass
class RemoteStagingResult(Result):
    """Result of the remote commit of a staging root"""

    staging_root: Optional[Path] = None
    profiles: List[ProfileCommitResult] = field(default_factory=list)

    @property
    def repositories(self) -> List[StagingRepository]:
        """Get repositories used, one per profile"""
        return [p.repository for p in self.profiles]

    @property
    def uploaded_count(self) -> int:
        return sum(len(p.uploaded) for p in self.profiles)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "message": self.message,
            "staging_root": str(self.staging_root) if self.staging_root else None,
            "profiles": [p.to_dict() for p in self.profiles],
            "warnings": self.warnings,
            "duration": self.duration,
        }


@dataclass
class ModuleDeployResult(Result):
    """Result of processing one module"""

    module_id: str = ""
    mode: DeployMode = DeployMode.SKIPPED
    profile_id: Optional[str] = None
    staging_directory: Optional[Path] = None
    deployed: List[DeployedFile] = field(default_factory=list)
    last_module: bool = False
    remote: Optional[RemoteStagingResult] = None
    remote_skipped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "module_id": self.module_id,
            "status": self.status.value,
            "message": self.message,
            "mode": self.mode.value,
            "profile_id": self.profile_id,
            "deployed": [d.to_dict() for d in self.deployed],
            "last_module": self.last_module,
            "remote_skipped": self.remote_skipped,
            "warnings": self.warnings,
            "duration": self.duration,
        }

        if self.staging_directory:
            data["staging_directory"] = str(self.staging_directory)
        if self.remote:
            data["remote"] = self.remote.to_dict()

        return data
