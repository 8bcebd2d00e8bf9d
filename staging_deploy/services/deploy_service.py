"""Deploy coordination: per-module routing between direct deploy and local staging"""

import logging
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import (
    ConfigError,
    ModuleNotFoundInBuildError,
    NothingToDeployError,
    OfflineError,
    StagingStateError,
    TransportError,
)
from ..constants import (
    DIRECT_UPLOAD,
    MSG_DIRECT_DEPLOY,
    MSG_MODULE_NOT_STAGING,
    MSG_NO_PRIMARY,
    MSG_REMOTE_SKIPPED,
    MSG_SKIP_ALL,
    MSG_STAGING_LOCALLY,
)
from ..core.local_store import LocalStagingStore
from ..core.module_tracker import LastModuleDetector
from ..core.profile_selector import StagingProfileSelector
from ..models.artifact import Artifact, ArtifactMetadata
from ..models.build import BuildContext
from ..models.config import Connectivity, DeployDirectives, StagingConfig
from ..models.result import (
    DeployedFile,
    DeployMode,
    ModuleDeployResult,
    OperationStatus,
    RemoteStagingResult,
)
from ..storage.base import ArtifactDeployer, StagingClient
from .remote_staging import RemoteStagingCoordinator
from .session import StagingSession

logger = logging.getLogger(__name__)


class DeployCoordinator:
    """Drives one module's part of the staged deploy

    For every module it either deploys directly or stages locally, and on
    the last module of the build hands the staged content to the remote
    staging coordinator.
    """

    def __init__(self,
                 deployer: ArtifactDeployer,
                 staging_client: StagingClient,
                 config: StagingConfig,
                 detector: Optional[LastModuleDetector] = None):
        """
        Initialize deploy coordinator

        Args:
            deployer: Direct deploy collaborator
            staging_client: Staging server collaborator
            config: Staging configuration
            detector: Last module detector
        """
        self.deployer = deployer
        self.staging_client = staging_client
        self.config = config
        self.selector = StagingProfileSelector(staging_client, config.explicit_profile)
        self.remote = RemoteStagingCoordinator(
            staging_client,
            repository_id=config.repository_id,
            description=config.description,
        )
        self.detector = detector or LastModuleDetector()

    def open_session(self, build: BuildContext, resume: bool = False) -> StagingSession:
        """Create the coordination context for a build"""
        return StagingSession(build, LocalStagingStore(self.config.staging_root), resume=resume)

    def deploy_module(self,
                      session: StagingSession,
                      module_id: str,
                      directives: DeployDirectives,
                      connectivity: Connectivity = Connectivity.ONLINE) -> ModuleDeployResult:
        """
        Deploy or stage one module

        Args:
            session: Coordination context of the build
            module_id: Module to process
            directives: Skip and release switches
            connectivity: Connectivity mode of the build

        Returns:
            ModuleDeployResult

        Raises:
            StagingDeployError: Any failure; remaining deploys of the module
                are not attempted
        """
        session.ensure_open()
        module = session.build.get_module(module_id)
        if module is None:
            raise ModuleNotFoundInBuildError(module_id)

        unit = module.unit
        artifact = unit.artifact
        result = ModuleDeployResult(module_id=module_id)

        if directives.skip:
            logger.info(MSG_SKIP_ALL)
            result.message = MSG_SKIP_ALL
            result.complete(OperationStatus.SKIPPED)
            return result

        if not module.staging_enabled:
            result.message = MSG_MODULE_NOT_STAGING.format(module=module_id)
            logger.info(result.message)
            result.complete(OperationStatus.SKIPPED)
            return result

        # Staging only makes sense for releasable artifacts
        skip_local_staging = directives.skip_local_staging or artifact.is_snapshot

        # Profile matching needs the server even when nothing is uploaded yet
        self._fail_if_offline(connectivity)

        if skip_local_staging:
            profile_id = DIRECT_UPLOAD
            staging_directory = None
            result.mode = DeployMode.DIRECT
            logger.info(MSG_DIRECT_DEPLOY)
        else:
            profile_id = self.selector.select(unit)
            staging_directory = session.store.prepare(profile_id)
            result.mode = DeployMode.STAGED
            result.staging_directory = staging_directory
            logger.info(MSG_STAGING_LOCALLY.format(path=staging_directory.absolute()))
        result.profile_id = profile_id

        if not unit.is_descriptor_only:
            artifact.add_metadata(ArtifactMetadata(kind="descriptor", file=unit.descriptor_file))

        if directives.mark_release:
            artifact.release = True

        def dispatch(file: Path, target: Artifact) -> None:
            result.deployed.extend(self.do_deploy(
                session.store, file, target, self.config.deploy_repository,
                staging_directory, skip_local_staging,
            ))

        if unit.is_descriptor_only:
            dispatch(unit.descriptor_file, artifact)
        elif artifact.file is not None and artifact.file.is_file():
            dispatch(artifact.file, artifact)
        elif not unit.attached_artifacts:
            raise NothingToDeployError(unit.coordinates)
        else:
            logger.info(MSG_NO_PRIMARY)
            descriptor_artifact = unit.create_descriptor_artifact()
            if directives.mark_release:
                descriptor_artifact.release = True

            dispatch(unit.descriptor_file, descriptor_artifact)

            # Attached artifacts must land under the version the descriptor got
            artifact.set_resolved_version(descriptor_artifact.version)

        for attached in unit.attached_artifacts:
            if attached.file is None:
                raise ConfigError(f"Attached artifact {attached.coordinates} has no file")
            dispatch(attached.file, attached)

        if not skip_local_staging:
            session.record_staged(profile_id)

        result.last_module = self.detector.is_last(session.build.modules, module_id)
        if result.last_module and session.has_staged_content:
            if not directives.skip_remote_staging:
                self._fail_if_offline(connectivity)
                result.remote = self.commit(session)
            else:
                location = staging_directory or session.store.root
                message = MSG_REMOTE_SKIPPED.format(path=location.absolute())
                logger.info(message)
                result.remote_skipped = True
                result.add_warning(message)

        result.message = f"{module_id}: {len(result.deployed)} file(s) {result.mode.value}"
        result.complete(OperationStatus.SUCCESS)
        return result

    def do_deploy(self,
                  store: LocalStagingStore,
                  file: Path,
                  artifact: Artifact,
                  target_repository: Optional[str],
                  staging_directory: Optional[Path],
                  skip_local_staging: bool) -> List[DeployedFile]:
        """
        Route one file either to the deployer or into the staging store

        Exactly one of the two collaborators is called.
        """
        file = Path(file)

        if skip_local_staging:
            try:
                location = self.deployer.deploy(file, artifact, target_repository)
            except OSError as e:
                raise TransportError(f"Failed to deploy {artifact.coordinates}: {e}", e) from e
            return [DeployedFile(artifact.coordinates, file, location, DeployMode.DIRECT)]

        if staging_directory is None:
            raise ConfigError(f"No staging directory for {artifact.coordinates}")

        written = store.stage(file, artifact, staging_directory)
        return [
            DeployedFile(artifact.coordinates, file, str(staging_directory / written[0]), DeployMode.STAGED)
        ]

    def commit(self, session: StagingSession) -> RemoteStagingResult:
        """Run the remote commit of a session, once"""
        session.ensure_open()
        if session.committed:
            raise StagingStateError("Staged content of this build was already committed")

        result = self.remote.commit(session.store, session.staged_profiles)
        session.mark_committed(result)
        return result

    @staticmethod
    def _fail_if_offline(connectivity: Connectivity) -> None:
        if connectivity == Connectivity.OFFLINE:
            raise OfflineError()

