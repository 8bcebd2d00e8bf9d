"""Business logic services for staging-deploy"""

from .session import StagingSession
from .remote_staging import RemoteStagingCoordinator
from .deploy_service import DeployCoordinator

__all__ = [
    "StagingSession",
    "RemoteStagingCoordinator",
    "DeployCoordinator",
]
