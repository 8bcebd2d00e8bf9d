"""Loading and validation of the YAML config file and build descriptor"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from ..api.exceptions import ConfigError
from ..constants import ENV_CONFIG_PATH, PROJECT_CONFIG_FILE, SUPPORTED_SERVER_TYPES
from ..models.build import BuildContext
from ..models.config import StagingConfig

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "version": {"type": ["string", "number"]},
        "staging": {
            "type": "object",
            "properties": {
                "root": {"type": "string"},
                "profile": {"type": "string"},
                "repository_id": {"type": ["string", "null"]},
                "description": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "deploy": {
            "type": "object",
            "properties": {"repository": {"type": "string"}},
            "additionalProperties": False,
        },
        "server": {
            "type": "object",
            "properties": {
                "type": {"enum": SUPPORTED_SERVER_TYPES},
                "path": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "offline": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_ARTIFACT_PROPERTIES = {
    "group_id": {"type": "string"},
    "artifact_id": {"type": "string"},
    "version": {"type": ["string", "number"]},
    "extension": {"type": "string"},
    "classifier": {"type": "string"},
    "file": {"type": "string"},
}

BUILD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["modules"],
    "properties": {
        "modules": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["group_id", "artifact_id", "version", "descriptor"],
                "properties": {
                    **_ARTIFACT_PROPERTIES,
                    "id": {"type": "string"},
                    "packaging": {"type": "string"},
                    "descriptor": {"type": "string"},
                    "staging": {"type": "boolean"},
                    "attached": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["file"],
                            "properties": _ARTIFACT_PROPERTIES,
                            "additionalProperties": False,
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
    },
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Read a YAML document with environment variable expansion"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    content = os.path.expandvars(content)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return data or {}


def _validate(data: Dict[str, Any], schema: Dict[str, Any], path: Path) -> None:
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"Schema validation failed for {path} at {location}: {e.message}") from e


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the config file

    Honors STAGING_DEPLOY_CONFIG, then looks for .staging-deploy.yaml in
    ``start_dir`` and its parents.
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)

    current = Path(start_dir or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path] = None, start_dir: Optional[Path] = None) -> StagingConfig:
    """
    Load configuration

    Args:
        path: Explicit config file; searched for when omitted
        start_dir: Directory to start the search from

    Returns:
        Configuration with relative paths anchored at the config file's
        directory, and environment overrides applied
    """
    if path is None:
        path = find_config_file(start_dir)

    if path is None:
        base_dir = Path(start_dir or Path.cwd())
        return StagingConfig().resolve_paths(base_dir).with_environment()

    path = Path(path)
    data = _load_yaml(path)
    _validate(data, CONFIG_SCHEMA, path)
    config = StagingConfig.from_dict(data).with_environment()
    return config.resolve_paths(path.parent.resolve())


def load_build(path: Path) -> BuildContext:
    """
    Load a build descriptor

    Args:
        path: YAML file listing modules in build order

    Returns:
        Build context with paths anchored at the descriptor's directory
    """
    path = Path(path)
    data = _load_yaml(path)
    _validate(data, BUILD_SCHEMA, path)

    build = BuildContext.from_dict(data, path.parent.resolve())

    seen = set()
    for module_id in build.module_ids:
        if module_id in seen:
            raise ConfigError(f"Duplicate module id in {path}: {module_id}")
        seen.add(module_id)

    return build
