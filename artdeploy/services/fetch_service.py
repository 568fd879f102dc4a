"""
Fetch Service

Downloads remote artifacts once and caches them on disk.
"""

from pathlib import Path
from typing import Optional

import requests

from artdeploy.constants import DEFAULT_DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE
from artdeploy.exceptions import FetchFailedError
from artdeploy.logger import DeployLogger


class FetchService:
    """Fetches a URL to a local path unless a copy already exists."""

    def __init__(
        self,
        timeout: int = DEFAULT_DOWNLOAD_TIMEOUT,
        logger: Optional[DeployLogger] = None,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.logger = logger
        self.session = session or requests.Session()

    def fetch(self, url: str, destination: Path) -> bool:
        """
        Download url to destination.

        The body is written to a .part file and renamed on success.

        Returns:
            True if downloaded, False if the local copy was reused

        Raises:
            FetchFailedError: On transfer errors or non-2xx responses
        """
        if destination.exists():
            if self.logger:
                self.logger.log(f"Using cached {destination}")
            return False

        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")

        if self.logger:
            self.logger.log(f"Downloading {url} -> {destination}")

        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(partial, "wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            partial.replace(destination)
        except requests.RequestException as e:
            partial.unlink(missing_ok=True)
            raise FetchFailedError(url, str(e))
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise FetchFailedError(url, f"Could not write {destination}: {e}")

        return True
