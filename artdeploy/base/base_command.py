"""
Base Command Class

Abstract base for artdeploy commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from artdeploy.exceptions import ArtdeployError
from artdeploy.logger import DeployLogger
from artdeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling through a single exit helper
    - Confirmation prompts
    """

    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.verbose = verbose
        self.console = console or Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str, log_dir: Path) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            command_name: Command name, used in the log file name
            log_dir: Root directory for log files

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(command_name, log_dir, verbose=self.verbose)
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for user confirmation.

        Args:
            question: Question to ask
            default: Default answer

        Returns:
            True if confirmed
        """
        default_str = "y" if default else "n"
        self.console.print(
            f"{question} [bold bright_white]\\[y/n][/bold bright_white] [dim]({default_str})[/dim]: ",
            end="",
        )
        try:
            answer = input().strip().lower()
        except EOFError:
            answer = ""

        if not answer:
            return default

        return answer in ["y", "yes"]

    def exit_with_error(
        self, message: str, context: Optional[str] = None, code: int = 1
    ) -> None:
        """
        Print error and exit.

        Args:
            message: Error message
            context: Optional context line
            code: Exit code
        """
        if self.logger:
            self.logger.log_error(message, context=context)

        self.console.print(f"\n[bold red]✗ Error:[/bold red] {escape(message)}")
        if context:
            self.print_dim(escape(context))
        if self.logger:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}")
        self.console.print()
        raise SystemExit(code)

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """Run command with error handling."""
        try:
            self.execute()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log_error("Operation cancelled by user")
                self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
            raise SystemExit(130)
        except SystemExit:
            raise
        except ArtdeployError as e:
            self.exit_with_error(e.message, context=e.context)
        except PermissionError as e:
            self.exit_with_error(
                f"Permission denied: {e}",
                context="Try running with appropriate permissions",
            )
        except Exception as e:
            self.exit_with_error(f"{type(e).__name__}: {e}")
        finally:
            if self.logger:
                self.logger.close()
