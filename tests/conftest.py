"""Shared fixtures and collaborator fakes for the staging-deploy test suite."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

from staging_deploy.api.exceptions import TransportError
from staging_deploy.constants import (
    ENV_CONFIG_PATH,
    ENV_LOG_LEVEL,
    ENV_OFFLINE,
    ENV_PROFILE,
    ENV_STAGING_ROOT,
)
from staging_deploy.core.local_store import LocalStagingStore
from staging_deploy.models import (
    Artifact,
    BuildContext,
    ModuleInfo,
    ProjectDeployUnit,
    RepositoryState,
    StagingConfig,
    StagingProfile,
)
from staging_deploy.services import DeployCoordinator
from staging_deploy.storage.base import ArtifactDeployer, StagingClient

SNAPSHOT_STAMP = "20260101.120000-1"


@dataclass
class DeployCall:
    file: Path
    coordinates: str
    version: str
    target_repository: Optional[str]


class RecordingDeployer(ArtifactDeployer):
    """Deployer fake that records calls and timestamps snapshots."""

    def __init__(self, fail_on_classifier: Optional[str] = None) -> None:
        self.calls: List[DeployCall] = []
        self.fail_on_classifier = fail_on_classifier

    def deploy(self, file: Path, artifact: Artifact, target_repository: Optional[str]) -> str:
        if self.fail_on_classifier and artifact.classifier == self.fail_on_classifier:
            raise TransportError(f"Connection reset while deploying {artifact.coordinates}")

        if artifact.is_snapshot and artifact.version == artifact.base_version:
            base = artifact.base_version[: -len("-SNAPSHOT")]
            artifact.set_resolved_version(f"{base}-{SNAPSHOT_STAMP}")

        self.calls.append(DeployCall(file, artifact.coordinates, artifact.version, target_repository))
        return f"{target_repository}/{artifact.repository_path}"


class FakeStagingClient(StagingClient):
    """Staging server fake with an in-memory profile catalog."""

    def __init__(
        self,
        profiles: Optional[Sequence[StagingProfile]] = None,
        close_state: RepositoryState = RepositoryState.CLOSED,
        fail_upload_suffix: Optional[str] = None,
    ) -> None:
        self.profiles = list(profiles) if profiles is not None else [
            StagingProfile(id="release-profile", name="Releases")
        ]
        self.close_state = close_state
        self.fail_upload_suffix = fail_upload_suffix
        self.queries: List[tuple] = []
        self.opened: List[tuple] = []
        self.uploads: List[tuple] = []
        self.closed: List[str] = []

    def list_profiles_matching(self, group_id: str, artifact_id: str, version: str) -> List[StagingProfile]:
        self.queries.append((group_id, artifact_id, version))
        return list(self.profiles)

    def open_repository(self, profile_id: str, description: str, repository_id: Optional[str] = None) -> str:
        self.opened.append((profile_id, repository_id))
        return repository_id or f"{profile_id}-{len(self.opened):03d}"

    def upload(self, repository_id: str, relative_path: str, file: Path) -> None:
        if self.fail_upload_suffix and relative_path.endswith(self.fail_upload_suffix):
            raise TransportError(f"Upload of {relative_path} timed out")
        self.uploads.append((repository_id, relative_path, Path(file).read_bytes()))

    def close(self, repository_id: str, description: str) -> RepositoryState:
        self.closed.append(repository_id)
        return self.close_state

    def uploaded_paths(self) -> List[str]:
        return [relative_path for _, relative_path, _ in self.uploads]


ModuleFactory = Callable[..., ModuleInfo]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep STAGING_DEPLOY_* settings of the host out of the tests."""
    for name in (ENV_CONFIG_PATH, ENV_STAGING_ROOT, ENV_PROFILE, ENV_OFFLINE, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def module_factory(tmp_path: Path) -> ModuleFactory:
    """Return a factory building modules with real files under ``tmp_path``."""

    def factory(
        module_id: str,
        version: str = "1.0.0",
        packaging: str = "jar",
        primary: bool = True,
        attached: Sequence[str] = (),
        group_id: str = "com.example",
        staging: bool = True,
    ) -> ModuleInfo:
        base = tmp_path / "modules" / module_id
        base.mkdir(parents=True, exist_ok=True)

        descriptor = base / "pom.xml"
        descriptor.write_text(f"<project>{module_id}</project>")

        primary_file = None
        if primary and packaging != "pom":
            primary_file = base / f"{module_id}-{version}.{packaging}"
            primary_file.write_bytes(f"{module_id} binary".encode())

        attached_artifacts = []
        for classifier in attached:
            attached_file = base / f"{module_id}-{version}-{classifier}.jar"
            attached_file.write_bytes(f"{module_id} {classifier}".encode())
            attached_artifacts.append(Artifact(
                group_id=group_id,
                artifact_id=module_id,
                base_version=version,
                extension="jar",
                classifier=classifier,
                file=attached_file,
            ))

        artifact = Artifact(
            group_id=group_id,
            artifact_id=module_id,
            base_version=version,
            extension="pom" if packaging == "pom" else packaging,
            file=primary_file,
        )
        unit = ProjectDeployUnit(
            artifact=artifact,
            packaging=packaging,
            descriptor_file=descriptor,
            attached_artifacts=attached_artifacts,
        )
        return ModuleInfo(id=module_id, unit=unit, staging_enabled=staging)

    return factory


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Location of the local staging area (not created up front)."""
    return tmp_path / "staging"


@pytest.fixture
def staging_config(tmp_path: Path, staging_root: Path) -> StagingConfig:
    return StagingConfig(
        staging_root=staging_root,
        deploy_repository=str(tmp_path / "repository"),
    )


@pytest.fixture
def deployer() -> RecordingDeployer:
    return RecordingDeployer()


@pytest.fixture
def staging_client() -> FakeStagingClient:
    return FakeStagingClient()


@pytest.fixture
def coordinator(
    deployer: RecordingDeployer,
    staging_client: FakeStagingClient,
    staging_config: StagingConfig,
) -> DeployCoordinator:
    return DeployCoordinator(deployer, staging_client, staging_config)


@pytest.fixture
def store(staging_root: Path) -> LocalStagingStore:
    return LocalStagingStore(staging_root)


def make_build(*modules: ModuleInfo) -> BuildContext:
    """Return a build context with ``modules`` in build order."""
    return BuildContext(modules=list(modules))
