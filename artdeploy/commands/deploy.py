"""
Deploy Command

Detects the platform, validates the flags, guards against unsafe state,
provisions the host for a start and dispatches the lifecycle action.
"""

from typing import Optional

from rich.console import Console

from artdeploy.base import BaseCommand
from artdeploy.exceptions import UnsafeStateTransitionError
from artdeploy.models.deployment import PROBED_ACTIONS, Action, DeploymentConfig
from artdeploy.models.results import ProvisionResult
from artdeploy.options import RawOptions, build_config
from artdeploy.platform_detector import detect_platform, ensure_privileges
from artdeploy.reporter import report_completion
from artdeploy.services.compose_service import ComposeBackend
from artdeploy.services.lifecycle_service import LifecycleController
from artdeploy.services.provisioner import Provisioner
from artdeploy.settings import Settings, load_settings


class DeployCommand(BaseCommand):
    """
    Run one lifecycle action against the Artifactory stack.

    Flow: platform check → config → state guard → provisioning (start)
    → lifecycle dispatch → clean (remove) → completion banner.
    """

    def __init__(
        self,
        options: RawOptions,
        settings: Optional[Settings] = None,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        super().__init__(verbose=verbose, console=console)
        self.options = options
        self.settings = settings
        self.config: Optional[DeploymentConfig] = None

    def guard_state(self, config: DeploymentConfig, backend: ComposeBackend) -> None:
        """
        Refuse a clean while the stack is running.

        Raises:
            UnsafeStateTransitionError: If clean is set and the stack is up
            BackendUnavailableError: If the state cannot be queried
        """
        if not config.clean or config.action not in PROBED_ACTIONS:
            return

        # Nothing has been deployed from here yet
        if config.is_start and not backend.compose_file.exists():
            return

        if backend.is_running():
            raise UnsafeStateTransitionError(config.action.value)

    def execute(self) -> None:
        """Execute deploy command."""
        info = detect_platform()
        ensure_privileges(info)

        settings = self.settings or load_settings()
        config = build_config(self.options, info)
        self.config = config

        logger = self.init_logger(config.action.value, settings.log_dir)
        logger.log(repr(config))

        self.show_header(
            title=config.action.value.capitalize(),
            details={"Data directory": config.data_dir, "Platform": info.family},
        )

        backend = ComposeBackend(settings, logger=logger)
        backend.ensure_available()
        self.guard_state(config, backend)

        if config.clean and config.action not in (Action.START, Action.REMOVE):
            logger.warning(f"Clean is ignored for {config.action.value}")

        result: Optional[ProvisionResult] = None
        provisioner = Provisioner(config, settings, confirm=self.confirm, logger=logger)

        if config.is_start:
            result = provisioner.provision()

        logger.step(f"Run {config.action.value}")
        LifecycleController(backend).dispatch(config.action)

        if config.action is Action.REMOVE and config.wants_clean:
            provisioner.clean()

        report_completion(config, result, console=self.console)

