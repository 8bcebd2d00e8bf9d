"""Stager API for staged deploy operations"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..core import LocalStagingStore, load_build, load_config
from ..models import (
    BuildContext,
    Connectivity,
    DeployDirectives,
    ModuleDeployResult,
    RemoteStagingResult,
    StagingConfig,
)
from ..services import DeployCoordinator
from ..storage import ArtifactDeployer, StagingClient, StorageFactory
from .exceptions import OfflineError

logger = logging.getLogger(__name__)


class Stager:
    """Stager class for staged deploy operations"""

    def __init__(self,
                 config: Optional[StagingConfig] = None,
                 deployer: Optional[ArtifactDeployer] = None,
                 staging_client: Optional[StagingClient] = None):
        """
        Initialize stager

        Args:
            config: Staging configuration (loaded from .staging-deploy.yaml if omitted)
            deployer: Direct deployer (created from config if omitted)
            staging_client: Staging server client (created from config if omitted)
        """
        self.config = config or load_config()
        self._deployer = deployer
        self._staging_client = staging_client
        self._coordinator: Optional[DeployCoordinator] = None

    @property
    def deployer(self) -> ArtifactDeployer:
        """Get direct deployer (lazy creation)"""
        if self._deployer is None:
            self._deployer = StorageFactory.create_deployer(self.config)
        return self._deployer

    @property
    def staging_client(self) -> StagingClient:
        """Get staging server client (lazy creation)"""
        if self._staging_client is None:
            self._staging_client = StorageFactory.create_staging_client(self.config)
        return self._staging_client

    @property
    def coordinator(self) -> DeployCoordinator:
        """Get deploy coordinator (lazy creation)"""
        if self._coordinator is None:
            self._coordinator = DeployCoordinator(self.deployer, self.staging_client, self.config)
        return self._coordinator

    @property
    def connectivity(self) -> Connectivity:
        return Connectivity.from_flag(self.config.offline)

    def deploy(self,
               build: BuildContext,
               directives: Optional[DeployDirectives] = None,
               module_id: Optional[str] = None) -> List[ModuleDeployResult]:
        """
        Deploy one module, or every staging-enabled module in build order

        Args:
            build: Build context
            directives: Skip and release switches
            module_id: Single module to process; earlier modules are assumed
                to have run in previous invocations

        Returns:
            One result per processed module

        Raises:
            StagingDeployError: On the first failing module
        """
        directives = directives or DeployDirectives()

        if module_id is not None:
            module_ids = [module_id]
        else:
            module_ids = [m.id for m in build.modules if m.staging_enabled]

        coordinator = self.coordinator
        results = []
        with coordinator.open_session(build, resume=module_id is not None) as session:
            for current in module_ids:
                logger.debug(f"Processing module {current}")
                results.append(coordinator.deploy_module(
                    session, current, directives, self.connectivity
                ))

        return results

    def commit(self) -> RemoteStagingResult:
        """
        Commit content left under the staging root by an earlier build

        Raises:
            OfflineError: If running offline
            RemoteStagingError: If upload or close fails
        """
        if self.connectivity == Connectivity.OFFLINE:
            raise OfflineError()

        store = LocalStagingStore(self.config.staging_root)
        return self.coordinator.remote.commit(store)

    def status(self) -> Dict[str, List[Tuple[str, int]]]:
        """
        List staged content

        Returns:
            Mapping of profile id to (relative path, size) in staging order
        """
        store = LocalStagingStore(self.config.staging_root)
        return {
            profile_id: [(rel, path.stat().st_size) for rel, path in store.files(profile_id)]
            for profile_id in store.profile_ids()
        }


def stage_build(build_file: Union[str, Path],
                config_file: Optional[Union[str, Path]] = None,
                module_id: Optional[str] = None,
                **flags) -> List[ModuleDeployResult]:
    """
    Convenience function: load config and build descriptor, then deploy

    Args:
        build_file: Build descriptor path
        config_file: Config file path (searched for when omitted)
        module_id: Single module to process
        **flags: DeployDirectives fields (skip, skip_local_staging, ...)

    Returns:
        One result per processed module
    """
    config = load_config(Path(config_file) if config_file else None)
    build = load_build(Path(build_file))
    return Stager(config).deploy(build, DeployDirectives(**flags), module_id=module_id)
