"""Staging Deploy - staged deployment of multi-module build artifacts.

Artifacts of every module are first collected in a local staging area and,
once the last module of the build is done, pushed as one unit into a
staging repository on the repository manager.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Exceptions
from .api.exceptions import (
    StagingDeployError,
    ConfigError,
    NoMatchingProfileError,
    AmbiguousProfileError,
    NothingToDeployError,
    ModuleNotFoundInBuildError,
    OfflineError,
    TransportError,
    RemoteStagingError,
    StagingStateError,
)

# Core API
from .api.stager import Stager, stage_build
from .services import DeployCoordinator, RemoteStagingCoordinator, StagingSession
from .core import LocalStagingStore, StagingProfileSelector, LastModuleDetector

# Data models
from .models import (
    Artifact,
    ProjectDeployUnit,
    StagingRepository,
    BuildContext,
    ModuleInfo,
    DeployDirectives,
    Connectivity,
    StagingConfig,
    ModuleDeployResult,
    RemoteStagingResult,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Stager",
    "DeployCoordinator",
    "RemoteStagingCoordinator",
    "StagingSession",
    "LocalStagingStore",
    "StagingProfileSelector",
    "LastModuleDetector",

    # Core API functions
    "stage_build",

    # Data models
    "Artifact",
    "ProjectDeployUnit",
    "StagingRepository",
    "BuildContext",
    "ModuleInfo",
    "DeployDirectives",
    "Connectivity",
    "StagingConfig",
    "ModuleDeployResult",
    "RemoteStagingResult",

    # Exceptions
    "StagingDeployError",
    "ConfigError",
    "NoMatchingProfileError",
    "AmbiguousProfileError",
    "NothingToDeployError",
    "ModuleNotFoundInBuildError",
    "OfflineError",
    "TransportError",
    "RemoteStagingError",
    "StagingStateError",
]
