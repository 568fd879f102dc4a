"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from artdeploy.models.deployment import SecretRecord


@dataclass
class ExecutionResult:
    """Result of a backend command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass
class ProvisionResult:
    """What a provisioning run created or reused."""

    data_dir: Path
    manifest_path: Path
    secret: Optional[SecretRecord] = None
    cleaned: bool = False
    created_dirs: list[Path] = field(default_factory=list)
    downloaded: list[Path] = field(default_factory=list)
    proxy_config_written: bool = False

    @property
    def secret_created(self) -> bool:
        """Check if the database password was generated on this run."""
        return self.secret is not None and self.secret.created

    def __repr__(self) -> str:
        return (
            f"ProvisionResult(data_dir={self.data_dir}, created_dirs={len(self.created_dirs)}, "
            f"downloaded={len(self.downloaded)})"
        )
