"""API layer for staging-deploy"""

from .exceptions import (
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
from .stager import Stager, stage_build

__all__ = [
    # Main classes
    "Stager",

    # Convenience functions
    "stage_build",

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
