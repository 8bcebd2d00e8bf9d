"""Configuration data models"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Any

from ..constants import (
    AUTO_PROFILE,
    CONFIG_VERSION,
    DEFAULT_SERVER_TYPE,
    DEFAULT_STAGING_DESCRIPTION,
    DEFAULT_STAGING_ROOT,
    ENV_OFFLINE,
    ENV_PROFILE,
    ENV_STAGING_ROOT,
    TRUTHY_VALUES,
)


class Connectivity(Enum):
    """Connectivity mode supplied by the invoking build tool"""
    ONLINE = "online"
    OFFLINE = "offline"

    @classmethod
    def from_flag(cls, offline: bool) -> 'Connectivity':
        return cls.OFFLINE if offline else cls.ONLINE


@dataclass
class DeployDirectives:
    """Per-invocation boolean switches"""

    skip: bool = False
    skip_local_staging: bool = False
    skip_remote_staging: bool = False
    mark_release: bool = False


@dataclass
class StagingConfig:
    """Settings read from .staging-deploy.yaml, environment and CLI"""

    staging_root: Path = field(default_factory=lambda: Path(DEFAULT_STAGING_ROOT))
    profile: str = AUTO_PROFILE
    repository_id: Optional[str] = None
    description: str = DEFAULT_STAGING_DESCRIPTION
    deploy_repository: Optional[str] = None
    server_type: str = DEFAULT_SERVER_TYPE
    server_path: Optional[Path] = None
    offline: bool = False
    version: str = CONFIG_VERSION

    def __post_init__(self):
        """Post-initialization processing"""
        if isinstance(self.staging_root, str):
            self.staging_root = Path(self.staging_root)
        if isinstance(self.server_path, str):
            self.server_path = Path(self.server_path)

    @property
    def explicit_profile(self) -> Optional[str]:
        """Get the user supplied profile id, None when matching is automatic"""
        if not self.profile or self.profile == AUTO_PROFILE:
            return None
        return self.profile

    def resolve_paths(self, base_dir: Path) -> 'StagingConfig':
        """Anchor relative paths at ``base_dir``"""
        staging_root = self.staging_root
        if not staging_root.is_absolute():
            staging_root = base_dir / staging_root

        server_path = self.server_path
        if server_path is not None and not server_path.is_absolute():
            server_path = base_dir / server_path

        return replace(self, staging_root=staging_root, server_path=server_path)

    def merged(self, **overrides: Any) -> 'StagingConfig':
        """Return a copy with every non-None override applied"""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def with_environment(self, environ: Optional[Dict[str, str]] = None) -> 'StagingConfig':
        """Apply STAGING_DEPLOY_* environment overrides"""
        environ = os.environ if environ is None else environ

        offline = None
        if environ.get(ENV_OFFLINE):
            offline = environ[ENV_OFFLINE].strip().lower() in TRUTHY_VALUES

        return self.merged(
            staging_root=Path(environ[ENV_STAGING_ROOT]).resolve() if environ.get(ENV_STAGING_ROOT) else None,
            profile=environ.get(ENV_PROFILE) or None,
            offline=offline,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StagingConfig':
        """Create from the YAML document structure"""
        staging = data.get("staging", {}) or {}
        deploy = data.get("deploy", {}) or {}
        server = data.get("server", {}) or {}

        config = cls()
        config.version = str(data.get("version", CONFIG_VERSION))
        if staging.get("root"):
            config.staging_root = Path(staging["root"])
        config.profile = staging.get("profile") or AUTO_PROFILE
        config.repository_id = staging.get("repository_id")
        config.description = staging.get("description") or DEFAULT_STAGING_DESCRIPTION
        config.deploy_repository = deploy.get("repository")
        config.server_type = server.get("type", DEFAULT_SERVER_TYPE)
        if server.get("path"):
            config.server_path = Path(server["path"])
        config.offline = bool(data.get("offline", False))
        return config
