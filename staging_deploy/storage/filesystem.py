"""Filesystem implementations of the deployer and the staging server client"""

import fnmatch
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from .base import ArtifactDeployer, StagingClient
from ..api.exceptions import ConfigError, TransportError
from ..constants import (
    SERVER_PROFILES_FILE,
    SERVER_REPOSITORIES_DIR,
    SERVER_SEQUENCE_FILE,
    SERVER_STATE_FILE,
    SNAPSHOT_STATE_FILE,
    SNAPSHOT_SUFFIX,
    SNAPSHOT_TIMESTAMP_FORMAT,
)
from ..models.artifact import Artifact
from ..models.staging import RepositoryState, StagingProfile
from ..utils.file_utils import copy_file, list_relative_files, read_json, write_json

logger = logging.getLogger(__name__)

REPOSITORY_CONTENT_DIR = "content"
REPOSITORY_METADATA_FILE = ".metadata.json"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_location(location: str) -> Path:
    """Turn a path or file:// URL into a local path"""
    if location.startswith("file://"):
        location = location[len("file://"):]
    return Path(location).expanduser()


class FileSystemDeployer(ArtifactDeployer):
    """Deploys into a repository laid out on the local filesystem"""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize filesystem deployer

        Args:
            clock: Time source for snapshot timestamps
        """
        self.clock = clock or _utcnow

    def deploy(self, file: Path, artifact: Artifact, target_repository: Optional[str]) -> str:
        """Copy file (and descriptor) into the repository layout"""
        if not target_repository:
            raise ConfigError(
                f"No deployment repository configured for {artifact.coordinates}; "
                "set deploy.repository in the config file"
            )

        root = resolve_location(target_repository)

        try:
            self._resolve_version(root, artifact)

            target = root / artifact.repository_path
            copy_file(Path(file), target)

            descriptor = artifact.descriptor
            if descriptor is not None:
                copy_file(descriptor.file, root / artifact.descriptor_path)

            self._update_metadata(root, artifact)
        except OSError as e:
            raise TransportError(f"Failed to deploy {artifact.coordinates}: {e}", e) from e

        logger.info(f"Deployed {artifact.coordinates} to {target}")
        return str(target)

    def _resolve_version(self, root: Path, artifact: Artifact) -> None:
        # Attached artifacts inherit an already resolved version
        if not artifact.is_snapshot or artifact.version != artifact.base_version:
            return

        state_file = root / artifact.directory / SNAPSHOT_STATE_FILE
        state = read_json(state_file, default={})
        build_number = int(state.get("buildNumber", 0)) + 1
        timestamp = self.clock().strftime(SNAPSHOT_TIMESTAMP_FORMAT)

        base = artifact.base_version[:-len(SNAPSHOT_SUFFIX)]
        artifact.set_resolved_version(f"{base}-{timestamp}-{build_number}")

        write_json(state_file, {"timestamp": timestamp, "buildNumber": build_number})

    @staticmethod
    def _update_metadata(root: Path, artifact: Artifact) -> None:
        group_path = artifact.group_id.replace(".", "/")
        metadata_file = root / group_path / artifact.artifact_id / REPOSITORY_METADATA_FILE
        metadata = read_json(metadata_file, default={})

        versions = metadata.get("versions", [])
        if artifact.base_version not in versions:
            versions.append(artifact.base_version)
        metadata["versions"] = versions
        metadata["latest"] = artifact.base_version
        if artifact.release and not artifact.is_snapshot:
            metadata["release"] = artifact.base_version
        metadata["lastUpdated"] = _utcnow().strftime("%Y%m%d%H%M%S")

        write_json(metadata_file, metadata)


class FileSystemStagingClient(StagingClient):
    """Staging server emulated in a local directory

    Layout::

        <root>/profiles.yaml
        <root>/repositories/<repository id>/.state.json
        <root>/repositories/<repository id>/content/<relative path>
    """

    def __init__(self, root: Path):
        """
        Initialize filesystem staging client

        Args:
            root: Server root directory
        """
        self.root = Path(root)
        self.repositories_dir = self.root / SERVER_REPOSITORIES_DIR
        self._profiles: Optional[List[StagingProfile]] = None

    @property
    def profiles(self) -> List[StagingProfile]:
        """Get profile catalog (lazy load)"""
        if self._profiles is None:
            self._profiles = self._load_profiles()
        return self._profiles

    def list_profiles_matching(self,
                               group_id: str,
                               artifact_id: str,
                               version: str) -> List[StagingProfile]:
        """Return profiles whose group and artifact patterns match"""
        return [
            profile for profile in self.profiles
            if self._matches(profile.group_patterns, group_id)
            and self._matches(profile.artifact_patterns, artifact_id)
        ]

    def open_repository(self,
                        profile_id: str,
                        description: str,
                        repository_id: Optional[str] = None) -> str:
        """Create a repository under a profile, or check an existing one"""
        if repository_id:
            state = self._read_state(repository_id)
            if state["state"] != RepositoryState.OPEN.value:
                raise ConfigError(
                    f"Staging repository {repository_id} is {state['state']}, not open"
                )
            return repository_id

        if not any(p.id == profile_id for p in self.profiles):
            raise ConfigError(f"Unknown staging profile: {profile_id}")

        repository_id = f"{profile_id}-{self._next_sequence():04d}"
        try:
            (self.repositories_dir / repository_id / REPOSITORY_CONTENT_DIR).mkdir(parents=True)
        except OSError as e:
            raise TransportError(f"Cannot create staging repository {repository_id}: {e}", e) from e

        self._write_state(repository_id, {
            "profile": profile_id,
            "state": RepositoryState.OPEN.value,
            "description": description,
            "created": _utcnow().isoformat(),
        })
        return repository_id

    def upload(self, repository_id: str, relative_path: str, file: Path) -> None:
        """Copy a file into an open repository"""
        state = self._read_state(repository_id)
        if state["state"] != RepositoryState.OPEN.value:
            raise TransportError(
                f"Cannot upload to staging repository {repository_id}: it is {state['state']}"
            )

        target = self.repositories_dir / repository_id / REPOSITORY_CONTENT_DIR / relative_path
        try:
            copy_file(Path(file), target)
        except OSError as e:
            raise TransportError(f"Upload of {relative_path} to {repository_id} failed: {e}", e) from e

    def close(self, repository_id: str, description: str) -> RepositoryState:
        """Close a repository; an empty repository fails to close"""
        state = self._read_state(repository_id)
        state["state"] = RepositoryState.CLOSING.value
        self._write_state(repository_id, state)

        content = self.list_content(repository_id)
        if content:
            state["state"] = RepositoryState.CLOSED.value
            state["close_description"] = description
        else:
            state["state"] = RepositoryState.FAILED.value
            state["failure"] = "Repository is empty"

        self._write_state(repository_id, state)
        return RepositoryState(state["state"])

    def get_state(self, repository_id: str) -> RepositoryState:
        """Get current repository state"""
        return RepositoryState(self._read_state(repository_id)["state"])

    def list_content(self, repository_id: str) -> List[str]:
        """List relative paths uploaded to a repository"""
        return list_relative_files(self.repositories_dir / repository_id / REPOSITORY_CONTENT_DIR)

    def _load_profiles(self) -> List[StagingProfile]:
        profiles_file = self.root / SERVER_PROFILES_FILE
        if not profiles_file.exists():
            raise ConfigError(f"Staging server profile catalog not found: {profiles_file}")

        try:
            with open(profiles_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read profile catalog {profiles_file}: {e}") from e

        return [StagingProfile.from_dict(entry) for entry in data.get("profiles", [])]

    @staticmethod
    def _matches(patterns: List[str], value: str) -> bool:
        if not patterns:
            return True
        return any(fnmatch.fnmatchcase(value, pattern) for pattern in patterns)

    def _next_sequence(self) -> int:
        sequence_file = self.root / SERVER_SEQUENCE_FILE
        current = 0
        if sequence_file.exists():
            current = int(sequence_file.read_text(encoding="utf-8").strip() or 0)
        sequence_file.parent.mkdir(parents=True, exist_ok=True)
        sequence_file.write_text(str(current + 1), encoding="utf-8")
        return current + 1

    def _read_state(self, repository_id: str) -> Dict[str, Any]:
        state = read_json(self.repositories_dir / repository_id / SERVER_STATE_FILE)
        if state is None:
            raise ConfigError(f"Staging repository not found: {repository_id}")
        return state

    def _write_state(self, repository_id: str, state: Dict[str, Any]) -> None:
        write_json(self.repositories_dir / repository_id / SERVER_STATE_FILE, state)
