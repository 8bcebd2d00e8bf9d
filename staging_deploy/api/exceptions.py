"""Exception definitions for staging-deploy API"""

from typing import List, Optional

from ..constants import ErrorCode


class StagingDeployError(Exception):
    """Base exception for staging-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(StagingDeployError):
    """Configuration error"""

    def __init__(self, message: str, error_code: str = ErrorCode.CONFIG_ERROR):
        super().__init__(message, error_code)


class NoMatchingProfileError(ConfigError):
    """No staging profile matches the module coordinates"""

    def __init__(self, coordinates: str):
        message = f"No staging profile matches {coordinates}"
        super().__init__(message, ErrorCode.NO_MATCHING_PROFILE)
        self.coordinates = coordinates


class AmbiguousProfileError(ConfigError):
    """More than one staging profile matches the module coordinates"""

    def __init__(self, coordinates: str, candidates: List[str]):
        message = (
            f"Ambiguous staging profile for {coordinates}: "
            f"candidates are {', '.join(candidates)}. "
            "Set an explicit profile to choose one."
        )
        super().__init__(message, ErrorCode.AMBIGUOUS_PROFILE)
        self.coordinates = coordinates
        self.candidates = list(candidates)


class NothingToDeployError(ConfigError):
    """Module produced neither a primary file nor attached artifacts"""

    def __init__(self, coordinates: str):
        message = (
            f"The packaging for {coordinates} did not assign a file to the build artifact"
        )
        super().__init__(message, ErrorCode.NOTHING_TO_DEPLOY)
        self.coordinates = coordinates


class ModuleNotFoundInBuildError(ConfigError):
    """Module identity is not part of the build"""

    def __init__(self, module_id: str):
        super().__init__(f"Module not found in build: {module_id}", ErrorCode.MODULE_NOT_IN_BUILD)
        self.module_id = module_id


class OfflineError(StagingDeployError):
    """Remote interaction required while running offline"""

    def __init__(self, message: str = None):
        if message is None:
            message = (
                "Cannot use staging in offline mode: the staging server must be "
                "reachable for profile selection and remote staging"
            )
        super().__init__(message, ErrorCode.OFFLINE)


class TransportError(StagingDeployError):
    """Deploy, local write or upload failure"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.TRANSPORT_FAILED)
        self.cause = cause


class RemoteStagingError(StagingDeployError):
    """Remote staging transaction failure"""

    def __init__(self, message: str, repository=None, state=None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.REMOTE_STAGING_FAILED)
        self.repository = repository
        self.state = state
        self.cause = cause


class StagingStateError(StagingDeployError):
    """Staging session used out of order"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_SESSION_STATE)
