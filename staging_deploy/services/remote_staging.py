"""Remote staging: commit locally staged content to the staging server"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..api.exceptions import ConfigError, RemoteStagingError, StagingDeployError
from ..constants import DEFAULT_STAGING_DESCRIPTION, MSG_MANUAL_CLEANUP
from ..core.local_store import LocalStagingStore
from ..models.result import OperationStatus, ProfileCommitResult, RemoteStagingResult
from ..models.staging import RepositoryState, StagingRepository
from ..storage.base import StagingClient

logger = logging.getLogger(__name__)


class RemoteStagingCoordinator:
    """Runs one remote staging transaction per staged profile"""

    def __init__(self,
                 staging_client: StagingClient,
                 repository_id: Optional[str] = None,
                 description: str = DEFAULT_STAGING_DESCRIPTION):
        """
        Initialize remote staging coordinator

        Args:
            staging_client: Staging server client
            repository_id: Pre-existing repository to deposit into (unmanaged)
            description: Description for repositories opened and closed here
        """
        self.staging_client = staging_client
        self.repository_id = repository_id
        self.description = description

    def commit(self,
               store: LocalStagingStore,
               profile_ids: Optional[List[str]] = None) -> RemoteStagingResult:
        """
        Upload pending staged content and close the managed repositories

        Profiles are committed in order; the first failure aborts the
        commit and leaves the remaining staged content on disk. A profile
        whose upload succeeded is marked committed in the store and is not
        picked up again.

        Args:
            store: Local staging store holding the build's content
            profile_ids: Profiles to commit; every pending profile when omitted

        Returns:
            RemoteStagingResult

        Raises:
            RemoteStagingError: Upload or close failed
            ConfigError: An explicit repository id was given for several profiles
        """
        result = RemoteStagingResult(staging_root=store.root)
        pending = [p for p in store.profile_ids() if not store.is_consumed(p)]
        if profile_ids is not None:
            pending = [p for p in pending if p in profile_ids]
        profile_ids = pending

        if self.repository_id and len(profile_ids) > 1:
            raise ConfigError(
                f"Staging repository {self.repository_id} was given explicitly, but content "
                f"is staged for several profiles: {', '.join(profile_ids)}"
            )

        if not profile_ids:
            result.message = f"Nothing staged under {store.root}"
            result.complete(OperationStatus.SKIPPED)
            return result

        for profile_id in profile_ids:
            files = store.consume(profile_id)
            commit = self._commit_profile(profile_id, files)
            store.mark_committed(profile_id, commit.repository.repository_id)
            result.profiles.append(commit)

        result.message = (
            f"Staged {result.uploaded_count} file(s) into "
            f"{', '.join(r.repository_id for r in result.repositories)}"
        )
        result.complete(OperationStatus.SUCCESS)
        return result

    def open(self, profile_id: str) -> StagingRepository:
        """Create a managed repository or reuse the user supplied one"""
        if self.repository_id:
            repository_id = self.staging_client.open_repository(
                profile_id, self.description, repository_id=self.repository_id
            )
            logger.info(f"Using existing staging repository {repository_id}")
            return StagingRepository(profile=profile_id, repository_id=repository_id, managed=False)

        repository_id = self.staging_client.open_repository(profile_id, self.description)
        logger.info(f"Created staging repository {repository_id} (profile {profile_id})")
        return StagingRepository(profile=profile_id, repository_id=repository_id, managed=True)

    def _commit_profile(self, profile_id: str, files: List[Tuple[str, Path]]) -> ProfileCommitResult:
        repository = self.open(profile_id)
        commit = ProfileCommitResult(repository=repository)

        try:
            for relative_path, path in files:
                self.staging_client.upload(repository.repository_id, relative_path, path)
                commit.uploaded.append(relative_path)
                logger.debug(f"Uploaded {relative_path} to {repository.repository_id}")
        except (StagingDeployError, OSError) as e:
            if repository.managed:
                logger.error(MSG_MANUAL_CLEANUP.format(
                    repository=repository.repository_id, profile=profile_id
                ))
            raise RemoteStagingError(
                f"Upload to staging repository {repository.repository_id} failed: {e}",
                repository=repository,
                state=RepositoryState.OPEN,
                cause=e,
            ) from e

        logger.info(f"Uploaded {len(commit.uploaded)} file(s) to {repository.repository_id}")

        if not repository.managed:
            # A user supplied repository is left exactly as it was
            commit.state = RepositoryState.OPEN
            return commit

        commit.state = self._close(repository)
        return commit

    def _close(self, repository: StagingRepository) -> RepositoryState:
        try:
            state = self.staging_client.close(repository.repository_id, self.description)
        except (StagingDeployError, OSError) as e:
            raise RemoteStagingError(
                f"Closing staging repository {repository.repository_id} failed: {e}",
                repository=repository,
                state=RepositoryState.CLOSING,
                cause=e,
            ) from e

        if state == RepositoryState.FAILED:
            raise RemoteStagingError(
                f"Staging repository {repository.repository_id} failed to close",
                repository=repository,
                state=state,
            )

        logger.info(f"Staging repository {repository.repository_id} is {state.value}")
        return state
