"""Collaborator interfaces: direct deployer and staging server client"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..models.artifact import Artifact
from ..models.staging import RepositoryState, StagingProfile


class ArtifactDeployer(ABC):
    """Publishes a file straight into its final repository"""

    @abstractmethod
    def deploy(self, file: Path, artifact: Artifact, target_repository: Optional[str]) -> str:
        """
        Deploy file to repository

        Implementations resolve the artifact version (e.g. timestamped
        snapshots) and record it with ``artifact.set_resolved_version``.

        Args:
            file: Content to deploy
            artifact: Artifact coordinates (and descriptor metadata)
            target_repository: Repository location

        Returns:
            Location the file was deployed to

        Raises:
            TransportError: If the transfer fails
        """
        pass


class StagingClient(ABC):
    """Narrow view of the staging repository manager"""

    @abstractmethod
    def list_profiles_matching(self,
                               group_id: str,
                               artifact_id: str,
                               version: str) -> List[StagingProfile]:
        """
        List profiles whose matching rules apply to the coordinates

        Returns:
            Matching profiles (possibly empty)
        """
        pass

    @abstractmethod
    def open_repository(self,
                        profile_id: str,
                        description: str,
                        repository_id: Optional[str] = None) -> str:
        """
        Open a staging repository

        Args:
            profile_id: Profile to stage under
            description: Description for a newly created repository
            repository_id: Existing repository to reuse instead of creating one

        Returns:
            Repository id
        """
        pass

    @abstractmethod
    def upload(self, repository_id: str, relative_path: str, file: Path) -> None:
        """
        Upload one file into a staging repository

        Raises:
            TransportError: If the upload fails
        """
        pass

    @abstractmethod
    def close(self, repository_id: str, description: str) -> RepositoryState:
        """
        Request the open -> closing transition

        Returns:
            Terminal state reported by the server
        """
        pass
