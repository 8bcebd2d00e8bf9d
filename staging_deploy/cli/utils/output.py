# staging_deploy/cli/utils/output.py
"""Output formatting utilities"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape
from rich.syntax import Syntax

from ...api.exceptions import StagingDeployError
from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import ModuleDeployResult, OperationStatus, RemoteStagingResult
from ...utils.file_utils import format_size

console = Console(emoji=False)


def format_module_results(results: List[ModuleDeployResult]) -> None:
    """Format and display per-module deploy results"""
    table = Table(title="Modules", box=box.ROUNDED)
    table.add_column("Module", style="cyan")
    table.add_column("Mode")
    table.add_column("Profile")
    table.add_column("Files", justify="right")
    table.add_column("Last", justify="center")

    for result in results:
        mode = result.mode.value
        if result.status == OperationStatus.SKIPPED:
            mode = "[yellow]skipped[/yellow]"
        table.add_row(
            result.module_id,
            mode,
            result.profile_id or "-",
            str(len(result.deployed)),
            "✓" if result.last_module else "",
        )

    console.print(table)

    for result in results:
        for warning in result.warnings:
            console.print(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")
        if result.remote:
            format_remote_result(result.remote)


def format_remote_result(result: RemoteStagingResult) -> None:
    """Format and display remote staging result"""
    if result.status == OperationStatus.SKIPPED:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(result.message)}[/yellow]")
        return

    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Remote staging completed!",
        "",
    ]
    for profile in result.profiles:
        repository = profile.repository
        kind = "managed" if repository.managed else "existing"
        lines.append(
            f"[bold]{repository.repository_id}[/bold] ({kind}, profile {repository.profile}): "
            f"{len(profile.uploaded)} file(s), state [cyan]{profile.state.value}[/cyan]"
        )

    panel = Panel(
        "\n".join(lines),
        title="Remote Staging",
        border_style="green"
    )
    console.print(panel)


def format_status(staged: Dict[str, List[Tuple[str, int]]], staging_root: Path) -> None:
    """Format and display locally staged content"""
    if not staged:
        console.print(f"[yellow]Nothing staged under {escape(str(staging_root))}[/yellow]")
        return

    for profile_id, files in staged.items():
        table = Table(title=f"Profile {profile_id}", box=box.ROUNDED)
        table.add_column("#", style="dim", width=4)
        table.add_column("Path", style="cyan")
        table.add_column("Size", justify="right")

        for index, (relative_path, size) in enumerate(files, 1):
            table.add_row(str(index), relative_path, format_size(size))

        console.print(table)


def format_error(error: Exception, title: str, hint: Optional[str] = None) -> None:
    """Display an error in a red panel"""
    message = f"[red]{EMOJI_ERROR} {escape(str(error))}[/red]"
    if isinstance(error, StagingDeployError) and error.error_code:
        message += f"\n\n[dim]Error code: {error.error_code}[/dim]"
    if hint:
        message += f"\n\n[dim]{hint}[/dim]"

    panel = Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red"
    )
    console.print(panel)


def format_json(data: Any, title: Optional[str] = None) -> None:
    """Format and display JSON data with syntax highlighting"""
    json_str = json.dumps(data, indent=2, default=str)
    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        panel = Panel(syntax, title=title, border_style="blue")
        console.print(panel)
    else:
        console.print(syntax)
