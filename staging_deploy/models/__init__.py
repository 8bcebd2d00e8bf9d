"""Data models for staging-deploy"""

from .artifact import Artifact, ArtifactMetadata, ProjectDeployUnit
from .staging import StagingProfile, StagingRepository, RepositoryState
from .build import ModuleInfo, BuildContext
from .config import Connectivity, DeployDirectives, StagingConfig
from .result import (
    OperationStatus,
    DeployMode,
    DeployedFile,
    ModuleDeployResult,
    ProfileCommitResult,
    RemoteStagingResult,
)

__all__ = [
    # Artifact models
    "Artifact",
    "ArtifactMetadata",
    "ProjectDeployUnit",

    # Staging server models
    "StagingProfile",
    "StagingRepository",
    "RepositoryState",

    # Build models
    "ModuleInfo",
    "BuildContext",

    # Config models
    "Connectivity",
    "DeployDirectives",
    "StagingConfig",

    # Result models
    "OperationStatus",
    "DeployMode",
    "DeployedFile",
    "ModuleDeployResult",
    "ProfileCommitResult",
    "RemoteStagingResult",
]
