"""Collaborator factory"""

from typing import Dict, Type

from .base import ArtifactDeployer, StagingClient
from .filesystem import FileSystemDeployer, FileSystemStagingClient
from ..api.exceptions import ConfigError
from ..models.config import StagingConfig


class StorageFactory:
    """Factory for creating deployer and staging client instances"""

    _staging_clients: Dict[str, Type[StagingClient]] = {
        "filesystem": FileSystemStagingClient,
    }

    @classmethod
    def create_deployer(cls, config: StagingConfig) -> ArtifactDeployer:
        """Create the direct deployer"""
        return FileSystemDeployer()

    @classmethod
    def create_staging_client(cls, config: StagingConfig) -> StagingClient:
        """
        Create staging server client from configuration

        Raises:
            ConfigError: If the server type is unsupported or incomplete
        """
        if config.server_type not in cls._staging_clients:
            raise ConfigError(f"Unsupported staging server type: {config.server_type}")

        if config.server_path is None:
            raise ConfigError(
                "Staging server path is not configured; set server.path in the config file"
            )

        client_class = cls._staging_clients[config.server_type]
        return client_class(config.server_path)
