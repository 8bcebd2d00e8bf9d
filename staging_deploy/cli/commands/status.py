"""Status command: show locally staged content"""

import sys
from pathlib import Path

import click

from ..utils.output import format_error, format_status
from ...api import Stager
from ...api.exceptions import StagingDeployError
from ...core import load_config


@click.command()
@click.option('--staging-root', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Local staging directory root')
@click.option('--config', '-c', 'config_file', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Config file (default: search for .staging-deploy.yaml)')
def status(staging_root, config_file):
    """List profiles and files under the staging root"""
    try:
        config = load_config(config_file).merged(
            staging_root=staging_root.resolve() if staging_root else None,
        )
        stager = Stager(config)
        format_status(stager.status(), config.staging_root)

    except StagingDeployError as e:
        format_error(e, "Status Error")
        sys.exit(1)
