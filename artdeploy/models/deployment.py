"""
Deployment Models

Dataclass models for the deployment configuration and persisted state.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Action(Enum):
    """Lifecycle actions understood by the backend."""

    START = "start"
    STOP = "stop"
    RESTART = "restart"
    STATUS = "status"
    REMOVE = "remove"
    LOGS = "logs"

    @classmethod
    def values(cls) -> list[str]:
        """List all action names in declaration order."""
        return [action.value for action in cls]


# Actions refused while the stack runs and a clean is requested
PROBED_ACTIONS = frozenset({Action.START, Action.STATUS, Action.RESTART, Action.LOGS})

# Actions that honour the clean flag
CLEAN_ACTIONS = frozenset({Action.START, Action.REMOVE})


@dataclass(frozen=True)
class PlatformInfo:
    """Host platform facts selected by the environment detector."""

    family: str
    default_data_dir: Path
    requires_root: bool


@dataclass(frozen=True)
class DeploymentConfig:
    """
    Validated configuration for one invocation.

    clean_implied is True when clean was switched on by the no-action
    default rather than requested with -c.
    """

    action: Action
    data_dir: Path
    clean: bool = False
    force: bool = False
    clean_implied: bool = False

    @property
    def is_start(self) -> bool:
        """Check if this invocation starts the stack."""
        return self.action is Action.START

    @property
    def wants_clean(self) -> bool:
        """Check if the data directory should be cleaned for this action."""
        return self.clean and self.action in CLEAN_ACTIONS

    def __repr__(self) -> str:
        return (
            f"DeploymentConfig(action={self.action.value}, data_dir={self.data_dir}, "
            f"clean={self.clean}, force={self.force})"
        )


@dataclass(frozen=True)
class SecretRecord:
    """Database password persisted under the data directory."""

    value: str
    path: Path
    created: bool = False

    def __repr__(self) -> str:
        return f"SecretRecord(path={self.path}, created={self.created})"
