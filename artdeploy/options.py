"""
Option Parsing

Turns raw flag values into a validated, immutable DeploymentConfig.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from artdeploy.exceptions import InvalidActionError, InvalidOptionError
from artdeploy.models.deployment import Action, DeploymentConfig, PlatformInfo


@dataclass(frozen=True)
class RawOptions:
    """Flag values exactly as given on the command line."""

    action: Optional[str] = None
    data_dir: Optional[str] = None
    clean: bool = False
    force: bool = False


def parse_action(value: str) -> Action:
    """
    Map an action string to an Action.

    Raises:
        InvalidActionError: If the value is not a lifecycle action
    """
    normalized = value.strip().lower()
    for action in Action:
        if action.value == normalized:
            return action
    raise InvalidActionError(value, Action.values())


def resolve_data_dir(value: Optional[str], info: PlatformInfo) -> Path:
    """Resolve the data directory, falling back to the platform default."""
    if value is None:
        return info.default_data_dir

    if not value.strip():
        raise InvalidOptionError(
            "Data directory must not be empty",
            context="Usage: -d <dataDir>",
        )

    return Path(value).expanduser().absolute()


def build_config(raw: RawOptions, info: PlatformInfo) -> DeploymentConfig:
    """
    Validate raw flags into a DeploymentConfig.

    Without an action the run is a start with clean switched on.
    """
    data_dir = resolve_data_dir(raw.data_dir, info)

    if raw.action is None:
        return DeploymentConfig(
            action=Action.START,
            data_dir=data_dir,
            clean=True,
            force=raw.force,
            clean_implied=not raw.clean,
        )

    return DeploymentConfig(
        action=parse_action(raw.action),
        data_dir=data_dir,
        clean=raw.clean,
        force=raw.force,
    )
