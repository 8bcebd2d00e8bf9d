"""Core functionality for staging-deploy"""

from .local_store import LocalStagingStore
from .profile_selector import StagingProfileSelector
from .module_tracker import LastModuleDetector
from .config_loader import load_config, load_build, find_config_file

__all__ = [
    "LocalStagingStore",
    "StagingProfileSelector",
    "LastModuleDetector",
    "load_config",
    "load_build",
    "find_config_file",
]
