"""
Provisioner

Prepares the host for a start: clean, directories, downloads, secret,
manifest patch and default proxy config. Every step is idempotent.
"""

import shutil
from pathlib import Path
from typing import Callable, List, Optional

from artdeploy.constants import DATA_SUBDIRECTORIES
from artdeploy.logger import DeployLogger
from artdeploy.models.deployment import DeploymentConfig
from artdeploy.models.results import ProvisionResult
from artdeploy.services.fetch_service import FetchService
from artdeploy.services.manifest_service import ManifestService
from artdeploy.services.proxy_config_service import ProxyConfigService
from artdeploy.services.secret_service import SecretService
from artdeploy.settings import Settings


class Provisioner:
    """
    Host preparation for the Artifactory stack.

    Args:
        config: Validated deployment configuration
        settings: Runtime settings (URLs, manifest path)
        confirm: Callable asking a yes/no question, used before a clean
        logger: Optional DeployLogger
        fetcher: Optional FetchService (a default one is built from settings)
    """

    def __init__(
        self,
        config: DeploymentConfig,
        settings: Settings,
        confirm: Callable[[str], bool],
        logger: Optional[DeployLogger] = None,
        fetcher: Optional[FetchService] = None,
    ):
        self.config = config
        self.settings = settings
        self.confirm = confirm
        self.logger = logger
        self.fetcher = fetcher or FetchService(
            timeout=settings.download_timeout, logger=logger
        )
        self.secrets = SecretService(config.data_dir)
        self.manifest = ManifestService(Path(settings.compose_file), logger=logger)
        self.proxy_config = ProxyConfigService(config.data_dir)

    @property
    def data_dir(self) -> Path:
        return self.config.data_dir

    def _step(self, name: str) -> None:
        if self.logger:
            self.logger.step(name)

    def _success(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def clean(self) -> bool:
        """
        Delete the data directory after confirmation.

        Force skips the question unless clean was only implied by the
        no-action default.

        Returns:
            True if the directory was removed
        """
        if not self.config.clean or not self.data_dir.exists():
            return False

        self._step("Clean data directory")

        must_ask = not self.config.force or self.config.clean_implied
        if must_ask and not self.confirm(f"Remove {self.data_dir} and all its data?"):
            if self.logger:
                self.logger.warning(f"Kept {self.data_dir}")
            return False

        shutil.rmtree(self.data_dir)
        self._success(f"Removed {self.data_dir}")
        return True

    def create_directories(self) -> List[Path]:
        """
        Create the data directory tree.

        Returns:
            Directories that did not exist before
        """
        created = []
        for parts in DATA_SUBDIRECTORIES:
            path = self.data_dir.joinpath(*parts)
            if not path.exists():
                created.append(path)
            path.mkdir(parents=True, exist_ok=True)
        return created

    def fetch_dependencies(self) -> List[Path]:
        """
        Download the database driver and the compose manifest.

        Returns:
            Paths that were downloaded on this run
        """
        downloads = [
            (self.settings.driver_url, self.data_dir / self.settings.driver_jar),
            (self.settings.compose_url, Path(self.settings.compose_file)),
        ]

        fetched = []
        for url, destination in downloads:
            if self.fetcher.fetch(url, destination):
                fetched.append(destination)
        return fetched

    def provision(self) -> ProvisionResult:
        """
        Run every provisioning step for a start.

        Raises:
            FetchFailedError, SecretError, PatchFailedError
        """
        result = ProvisionResult(
            data_dir=self.data_dir, manifest_path=Path(self.settings.compose_file)
        )

        result.cleaned = self.clean()

        self._step("Prepare data directory")
        result.created_dirs = self.create_directories()
        self._success(f"Directories ready under {self.data_dir}")

        self._step("Fetch dependencies")
        result.downloaded = self.fetch_dependencies()
        self._success(
            f"Downloaded {len(result.downloaded)} file(s)"
            if result.downloaded
            else "Using cached downloads"
        )

        self._step("Database password")
        result.secret = self.secrets.ensure()
        if result.secret.created:
            self._success(f"Generated password stored in {result.secret.path}")
        else:
            self._success("Using existing password")

        self._step("Patch compose file")
        self.manifest.patch(self.data_dir, result.secret.value, self.settings.driver_jar)
        self._success(f"Patched {result.manifest_path}")

        result.proxy_config_written = self.proxy_config.ensure()
        if result.proxy_config_written:
            self._success(f"Wrote {self.proxy_config.config_path}")

        return result
