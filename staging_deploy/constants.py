"""Global constants for staging-deploy"""

import re

APP_NAME = "staging-deploy"
LOG_FORMAT = "%(message)s"

# Version related
CONFIG_VERSION = "1.0"

# Project identification
PROJECT_CONFIG_FILE = ".staging-deploy.yaml"

# Routing target used when local staging is skipped
DIRECT_UPLOAD = "direct"

# Special profile value meaning "ask the staging server"
AUTO_PROFILE = "auto"

# Packaging whose only deployable is the build descriptor itself
DESCRIPTOR_PACKAGING = "pom"
DESCRIPTOR_EXTENSION = "pom"

SNAPSHOT_SUFFIX = "-SNAPSHOT"
SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d.%H%M%S"

# Directory structure
DEFAULT_STAGING_ROOT = "target/staging"
STAGING_INDEX_FILE = ".index"
STAGING_COMMITTED_FILE = ".committed"
SNAPSHOT_STATE_FILE = ".snapshot.json"

# Filesystem staging server layout
SERVER_PROFILES_FILE = "profiles.yaml"
SERVER_REPOSITORIES_DIR = "repositories"
SERVER_STATE_FILE = ".state.json"
SERVER_SEQUENCE_FILE = ".sequence"

DEFAULT_STAGING_DESCRIPTION = "Staged by staging-deploy"
DEFAULT_SERVER_TYPE = "filesystem"
SUPPORTED_SERVER_TYPES = ["filesystem"]

# Environment variables
ENV_CONFIG_PATH = "STAGING_DEPLOY_CONFIG"
ENV_STAGING_ROOT = "STAGING_DEPLOY_ROOT"
ENV_PROFILE = "STAGING_DEPLOY_PROFILE"
ENV_OFFLINE = "STAGING_DEPLOY_OFFLINE"
ENV_LOG_LEVEL = "STAGING_DEPLOY_LOG_LEVEL"

TRUTHY_VALUES = ("1", "true", "yes", "on")


# Error codes
class ErrorCode:
    CONFIG_ERROR = "SD001"
    NO_MATCHING_PROFILE = "SD002"
    AMBIGUOUS_PROFILE = "SD003"
    NOTHING_TO_DEPLOY = "SD004"
    MODULE_NOT_IN_BUILD = "SD005"
    OFFLINE = "SD010"
    TRANSPORT_FAILED = "SD020"
    REMOTE_STAGING_FAILED = "SD021"
    INVALID_SESSION_STATE = "SD030"


# Validation patterns
PROFILE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"

# Messages templates
MSG_SKIP_ALL = "Skipping staging."
MSG_DIRECT_DEPLOY = "Performing ordinary deploy..."
MSG_STAGING_LOCALLY = "Staging locally (stagingDirectory=\"{path}\")..."
MSG_NO_PRIMARY = "No primary artifact to deploy, deploying attached artifacts instead."
MSG_MODULE_NOT_STAGING = "Module {module} does not take part in staging, skipping."
MSG_REMOTE_SKIPPED = (
    "Artifacts locally staged in directory {path}, "
    "skipping remote staging at user's demand."
)
MSG_MANUAL_CLEANUP = (
    "Staging repository {repository} (profile {profile}) was left open after a failed "
    "upload and needs manual cleanup"
)
