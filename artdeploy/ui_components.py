"""
artdeploy - UI Components
Standardized headers and UI elements
"""

from typing import Optional

from rich.console import Console

LOGO = "artdeploy"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized artdeploy command header.

    Args:
        title: Main title (e.g., "Start", "Status")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Start",
            details={"Data directory": "/data"}
        )
    """
    if console is None:
        console = Console()

    console.print(
        f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim] [bold white]{title}[/bold white]"
    )

    if subtitle:
        console.print(
            f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim] [dim]{subtitle}[/dim]"
        )

    if details:
        for key, value in details.items():
            console.print(
                f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim] {key}: [cyan]{value}[/cyan]"
            )

    console.print()
