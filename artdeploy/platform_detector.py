"""
Environment Detection

Determines the host platform family, its default data directory and
whether the run needs root.
"""

import os
import platform
from pathlib import Path
from typing import Callable, Optional

from artdeploy.constants import (
    DEFAULT_DARWIN_DATA_DIR,
    DEFAULT_LINUX_DATA_DIR,
    PLATFORM_DARWIN,
    PLATFORM_LINUX,
)
from artdeploy.exceptions import PrivilegeRequiredError, UnsupportedPlatformError
from artdeploy.models.deployment import PlatformInfo


def detect_platform(system: Optional[str] = None) -> PlatformInfo:
    """
    Identify the platform family.

    Args:
        system: Platform name override, defaults to platform.system()

    Returns:
        PlatformInfo for Linux or Darwin

    Raises:
        UnsupportedPlatformError: For any other family
    """
    family = system if system is not None else platform.system()

    if family == PLATFORM_LINUX:
        return PlatformInfo(
            family=family,
            default_data_dir=Path(DEFAULT_LINUX_DATA_DIR),
            requires_root=True,
        )

    if family == PLATFORM_DARWIN:
        return PlatformInfo(
            family=family,
            default_data_dir=Path(DEFAULT_DARWIN_DATA_DIR).expanduser(),
            requires_root=False,
        )

    raise UnsupportedPlatformError(family)


def ensure_privileges(
    info: PlatformInfo, geteuid: Optional[Callable[[], int]] = None
) -> None:
    """
    Enforce root on platforms that need it.

    Raises:
        PrivilegeRequiredError: If root is required and the process is not root
    """
    if not info.requires_root:
        return

    geteuid = geteuid or os.geteuid
    if geteuid() != 0:
        raise PrivilegeRequiredError(info.family)
