"""Deployer and staging server backends for staging-deploy"""

from .base import ArtifactDeployer, StagingClient
from .filesystem import FileSystemDeployer, FileSystemStagingClient
from .factory import StorageFactory

__all__ = [
    'ArtifactDeployer',
    'StagingClient',
    'FileSystemDeployer',
    'FileSystemStagingClient',
    'StorageFactory',
]
