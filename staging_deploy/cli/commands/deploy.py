"""Deploy command implementation"""

import sys
from pathlib import Path

import click

from ..utils.output import console, format_error, format_json, format_module_results
from ...api import Stager
from ...api.exceptions import ConfigError, OfflineError, StagingDeployError
from ...constants import AUTO_PROFILE
from ...core import load_build, load_config
from ...models import DeployDirectives


@click.command()
@click.option('--build', '-b', 'build_file', required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Build descriptor listing modules in build order')
@click.option('--module', '-m', 'module_id', default=None,
              help='Process only this module (default: every module in order)')
@click.option('--skip', is_flag=True,
              help='Skip the staging workflow entirely')
@click.option('--skip-local-staging', is_flag=True,
              help='Deploy directly instead of staging locally')
@click.option('--skip-remote-staging', is_flag=True,
              help='Stage locally but do not push to the staging server')
@click.option('--mark-release', is_flag=True,
              help='Flag the primary artifact as a release')
@click.option('--profile', '-p', default=None, metavar='ID|auto',
              help=f'Staging profile id, or "{AUTO_PROFILE}" to let the server match one')
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
def deploy(ctx, build_file, module_id, skip, skip_local_staging, skip_remote_staging,
           mark_release, profile, staging_root, repository_id, offline, config_file, as_json):
    """Deploy or stage build modules

    Releasable modules are staged under a local directory per staging
    profile; after the last module the staged content is uploaded to a
    new staging repository which is then closed. Snapshot modules are
    deployed directly.

    Examples:
        # Whole build, profile matched by the server
        staging-deploy deploy --build build.yaml

        # One module, invoked by the build tool
        staging-deploy deploy --build build.yaml --module core

        # Stage locally only, commit later
        staging-deploy deploy --build build.yaml --skip-remote-staging
    """
    try:
        config = load_config(config_file).merged(
            profile=profile,
            staging_root=staging_root.resolve() if staging_root else None,
            repository_id=repository_id,
            offline=True if offline else None,
        )
        build = load_build(build_file)

        directives = DeployDirectives(
            skip=skip,
            skip_local_staging=skip_local_staging,
            skip_remote_staging=skip_remote_staging,
            mark_release=mark_release,
        )

        stager = Stager(config)
        results = stager.deploy(build, directives, module_id=module_id)

        if as_json:
            format_json([result.to_dict() for result in results])
        else:
            format_module_results(results)
            console.print("\n[green]✓ Deploy completed successfully![/green]")

    except OfflineError as e:
        format_error(e, "Connectivity Error", "Run the build online to use staging.")
        sys.exit(1)

    except ConfigError as e:
        format_error(e, "Configuration Error")
        sys.exit(1)

    except StagingDeployError as e:
        format_error(e, "Deploy Error")
        sys.exit(1)

    except Exception as e:
        format_error(
            e,
            "Unexpected Error",
            "This might be a bug. Please report it if the problem persists.",
        )
        if ctx.obj is not None and ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
