"""artdeploy - Completion summary"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from artdeploy.constants import SUCCESS_STARTED
from artdeploy.models.deployment import DeploymentConfig
from artdeploy.models.results import ProvisionResult


def report_completion(
    config: DeploymentConfig,
    result: Optional[ProvisionResult],
    console: Optional[Console] = None,
) -> bool:
    """
    Print the completion banner for a start.

    Returns:
        True if a banner was printed
    """
    if not config.is_start or result is None:
        return False

    console = console or Console()

    lines = [
        f"[bold green]✓ {SUCCESS_STARTED}[/bold green]",
        "",
        f"[white]Data directory:[/white] [cyan]{result.data_dir}[/cyan]",
        f"[white]Compose file:[/white]   [cyan]{result.manifest_path}[/cyan]",
    ]

    if result.secret_created:
        lines.extend(
            [
                "",
                "[yellow]A database password was generated for this installation.[/yellow]",
                f"[white]Stored in:[/white]      [cyan]{result.secret.path}[/cyan]",
            ]
        )

    console.print()
    console.print(Panel.fit("\n".join(lines), border_style="green"))
    return True
