"""
Compose Backend Service

Thin wrapper over the docker-compose binary, scoped to one descriptor file.
Also answers whether the managed stack is currently running.
"""

import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from artdeploy.exceptions import BackendUnavailableError
from artdeploy.logger import DeployLogger, run_with_progress
from artdeploy.models.results import ExecutionResult
from artdeploy.settings import Settings

RUNNING_PATTERN = re.compile(r"\b(Up|running)\b")


class ComposeBackend:
    """
    Runs compose subcommands against the local manifest.

    Responsibilities:
    - Preflight check for the compose binary
    - Captured runs (with spinner) and streamed runs (to the terminal)
    - Running-state probe
    """

    def __init__(self, settings: Settings, logger: Optional[DeployLogger] = None):
        self.settings = settings
        self.logger = logger
        self.compose_file = Path(settings.compose_file)

    def build_command(self, args: Sequence[str]) -> List[str]:
        """Build argv for a compose subcommand."""
        return [*self.settings.compose_command, "-f", str(self.compose_file), *args]

    def ensure_available(self) -> None:
        """
        Check that the compose binary is installed.

        Raises:
            BackendUnavailableError: If the binary is not on PATH
        """
        command = self.settings.compose_command
        if not command or shutil.which(command[0]) is None:
            raise BackendUnavailableError(
                f"'{self.settings.compose_bin}' not found",
                context="Install docker-compose or set ARTDEPLOY_COMPOSE_BIN",
            )

    def ensure_manifest(self) -> None:
        """
        Check that the descriptor file exists.

        Raises:
            BackendUnavailableError: If the manifest is missing
        """
        if not self.compose_file.exists():
            raise BackendUnavailableError(
                f"Compose file not found: {self.compose_file}",
                context="Run: artdeploy -a start",
            )

    def run(
        self, args: Sequence[str], description: str, stream: bool = False
    ) -> ExecutionResult:
        """
        Run a compose subcommand.

        Args:
            args: Subcommand and its arguments
            description: Progress text
            stream: Send output straight to the terminal instead of capturing

        Returns:
            ExecutionResult (output is empty when streamed)
        """
        command = self.build_command(args)
        command_str = " ".join(command)

        if stream:
            if self.logger:
                self.logger.log_command(command_str)
            completed = subprocess.run(command)
            return ExecutionResult(returncode=completed.returncode, command=command_str)

        if self.logger:
            returncode, stdout, stderr = run_with_progress(
                self.logger, command, description
            )
            return ExecutionResult(returncode, stdout, stderr, command_str)

        completed = subprocess.run(command, capture_output=True, text=True)
        return ExecutionResult(
            completed.returncode, completed.stdout, completed.stderr, command_str
        )

    def is_running(self) -> bool:
        """
        Report whether any service of the stack is up.

        Raises:
            BackendUnavailableError: If the manifest is missing or ps fails
        """
        self.ensure_manifest()

        command = self.build_command(["ps"])
        if self.logger:
            self.logger.log_command(" ".join(command))

        try:
            completed = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise BackendUnavailableError(
                "Could not query stack state", context=str(e)
            )

        if completed.returncode != 0:
            raise BackendUnavailableError(
                "Could not query stack state",
                context=completed.stderr.strip() or f"Exit code: {completed.returncode}",
            )

        if self.logger:
            self.logger.log_output(completed.stdout, "stdout")

        # First line of ps output is the table header
        lines = completed.stdout.splitlines()[1:]
        return any(RUNNING_PATTERN.search(line) for line in lines)
