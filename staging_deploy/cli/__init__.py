"""Command line interface for staging-deploy"""

from .main import cli, main

__all__ = ["cli", "main"]
