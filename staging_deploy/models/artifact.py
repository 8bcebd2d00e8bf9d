"""Artifact data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import (
    DESCRIPTOR_EXTENSION,
    DESCRIPTOR_PACKAGING,
    SNAPSHOT_SUFFIX,
)


@dataclass
class ArtifactMetadata:
    """Companion file deployed next to an artifact"""

    kind: str
    file: Path

    def __post_init__(self):
        if isinstance(self.file, str):
            self.file = Path(self.file)


@dataclass
class Artifact:
    """A single deployable unit identified by its coordinates"""

    group_id: str
    artifact_id: str
    base_version: str
    extension: str = "jar"
    classifier: Optional[str] = None
    file: Optional[Path] = None
    release: bool = False
    metadata: List[ArtifactMetadata] = field(default_factory=list)
    resolved_version: Optional[str] = None

    # Attached artifacts follow the version of the artifact they are attached to
    parent: Optional['Artifact'] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        """Post-initialization processing"""
        if isinstance(self.file, str):
            self.file = Path(self.file)

    @property
    def is_snapshot(self) -> bool:
        """Check if this is an unreleased build"""
        return self.base_version.endswith(SNAPSHOT_SUFFIX)

    @property
    def version(self) -> str:
        """Version used for deployment coordinates"""
        if self.resolved_version:
            return self.resolved_version
        if self.parent is not None and self.parent.base_version == self.base_version:
            return self.parent.version
        return self.base_version

    @property
    def coordinates(self) -> str:
        """Get coordinates string (group:artifact:extension[:classifier]:version)"""
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    @property
    def filename(self) -> str:
        """Get repository file name"""
        name = f"{self.artifact_id}-{self.version}"
        if self.classifier:
            name = f"{name}-{self.classifier}"
        return f"{name}.{self.extension}"

    @property
    def directory(self) -> str:
        """Get repository directory (group path / artifact / base version)"""
        group_path = self.group_id.replace(".", "/")
        return f"{group_path}/{self.artifact_id}/{self.base_version}"

    @property
    def repository_path(self) -> str:
        """Get relative path of the artifact inside a repository layout"""
        return f"{self.directory}/{self.filename}"

    @property
    def descriptor(self) -> Optional[ArtifactMetadata]:
        """Get attached descriptor metadata, if any"""
        for entry in self.metadata:
            if entry.kind == "descriptor":
                return entry
        return None

    @property
    def descriptor_path(self) -> str:
        """Get relative path of the companion descriptor"""
        return f"{self.directory}/{self.artifact_id}-{self.version}.{DESCRIPTOR_EXTENSION}"

    def add_metadata(self, metadata: ArtifactMetadata) -> None:
        """Attach metadata, replacing an existing entry of the same kind"""
        self.metadata = [m for m in self.metadata if m.kind != metadata.kind]
        self.metadata.append(metadata)

    def set_resolved_version(self, version: str) -> None:
        """Record the version a deployment resolved this artifact to"""
        self.resolved_version = version

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'Artifact':
        """Create from dictionary"""
        file_value = data.get("file")
        file_path = None
        if file_value:
            file_path = Path(file_value)
            if base_dir is not None and not file_path.is_absolute():
                file_path = base_dir / file_path

        return cls(
            group_id=data["group_id"],
            artifact_id=data["artifact_id"],
            base_version=str(data["version"]),
            extension=data.get("extension", "jar"),
            classifier=data.get("classifier"),
            file=file_path,
        )


@dataclass
class ProjectDeployUnit:
    """Everything one module hands over for deployment"""

    artifact: Artifact
    packaging: str
    descriptor_file: Path
    attached_artifacts: List[Artifact] = field(default_factory=list)

    def __post_init__(self):
        """Post-initialization processing"""
        if isinstance(self.descriptor_file, str):
            self.descriptor_file = Path(self.descriptor_file)

        for attached in self.attached_artifacts:
            attached.parent = self.artifact

    @property
    def is_descriptor_only(self) -> bool:
        """Check if the descriptor is the primary deployable"""
        return self.packaging == DESCRIPTOR_PACKAGING

    @property
    def coordinates(self) -> str:
        """Get module coordinates (group:artifact:version)"""
        return f"{self.artifact.group_id}:{self.artifact.artifact_id}:{self.artifact.base_version}"

    def attach(self, artifact: Artifact) -> None:
        """Attach an additional artifact"""
        artifact.parent = self.artifact
        self.attached_artifacts.append(artifact)

    def create_descriptor_artifact(self) -> Artifact:
        """Synthesize a descriptor-only artifact from the module coordinates"""
        return Artifact(
            group_id=self.artifact.group_id,
            artifact_id=self.artifact.artifact_id,
            base_version=self.artifact.base_version,
            extension=DESCRIPTOR_EXTENSION,
            file=self.descriptor_file,
        )
