# staging_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import commit
from . import status

__all__ = [
    "deploy",
    "commit",
    "status",
]
