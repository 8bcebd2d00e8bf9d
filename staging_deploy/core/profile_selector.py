"""Staging profile selection"""

import logging
from typing import Optional

from ..api.exceptions import AmbiguousProfileError, NoMatchingProfileError
from ..models.artifact import ProjectDeployUnit
from ..storage.base import StagingClient

logger = logging.getLogger(__name__)


class StagingProfileSelector:
    """Decides which staging profile a module's artifacts belong to"""

    def __init__(self, staging_client: StagingClient, profile_override: Optional[str] = None):
        """
        Initialize profile selector

        Args:
            staging_client: Client for the staging server profile catalog
            profile_override: Explicit profile id, used verbatim when set
        """
        self.staging_client = staging_client
        self.profile_override = profile_override

    def select(self, unit: ProjectDeployUnit) -> str:
        """
        Select the staging profile for a module

        Args:
            unit: Module deployables

        Returns:
            Profile id

        Raises:
            NoMatchingProfileError: No profile matches the coordinates
            AmbiguousProfileError: More than one profile matches
        """
        if self.profile_override:
            logger.info(f"Using staging profile {self.profile_override} (user supplied)")
            return self.profile_override

        artifact = unit.artifact
        profiles = self.staging_client.list_profiles_matching(
            artifact.group_id, artifact.artifact_id, artifact.base_version
        )

        if not profiles:
            raise NoMatchingProfileError(unit.coordinates)

        if len(profiles) > 1:
            raise AmbiguousProfileError(
                unit.coordinates,
                [profile.display_name for profile in profiles],
            )

        profile = profiles[0]
        logger.info(f"Using staging profile {profile.display_name} (matched by server)")
        return profile.id
