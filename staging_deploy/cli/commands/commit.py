"""Commit command: push previously staged content to the staging server"""

import sys
from pathlib import Path

import click

from ..utils.output import console, format_error, format_json, format_remote_result
from ...api import Stager
from ...api.exceptions import OfflineError, StagingDeployError
from ...core import load_config


@click.command()
@click.option('--staging-root', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Local staging directory root')
@click.option('--repository-id', default=None,
              help='Deposit into this existing staging repository')
@click.option('--offline', is_flag=True,
              help='Build runs in offline mode')
@click.option('--config', '-c', 'config_file', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Config file (default: search for .staging-deploy.yaml)')
@click.option('--json', 'as_json', is_flag=True,
              help='Print results as JSON')
@click.pass_context
def commit(ctx, staging_root, repository_id, offline, config_file, as_json):
    """Upload locally staged content and close the staging repository

    Use this after a build run with --skip-remote-staging.

    Examples:
        staging-deploy commit
        staging-deploy commit --repository-id release-profile-0007
    """
    try:
        config = load_config(config_file).merged(
            staging_root=staging_root.resolve() if staging_root else None,
            repository_id=repository_id,
            offline=True if offline else None,
        )

        result = Stager(config).commit()
        if as_json:
            format_json(result.to_dict())
        else:
            format_remote_result(result)

    except OfflineError as e:
        format_error(e, "Connectivity Error")
        sys.exit(1)

    except StagingDeployError as e:
        format_error(e, "Commit Error")
        sys.exit(1)

    except Exception as e:
        format_error(e, "Unexpected Error")
        if ctx.obj is not None and ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
