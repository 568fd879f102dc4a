"""
Secret Service

Generates the database password once per data directory lifetime.
"""

import base64
import hashlib
import os
import time
from pathlib import Path
from typing import Callable, Optional

from artdeploy.constants import (
    SECRET_FILE_PERMISSIONS,
    SECRET_FILENAME,
    SECRET_LENGTH,
    SECRET_SENTINEL_FILENAME,
)
from artdeploy.exceptions import SecretError
from artdeploy.models.deployment import SecretRecord


def generate_secret(timestamp: int, length: int = SECRET_LENGTH) -> str:
    """Derive a password from the base64 of the SHA-256 of a Unix timestamp."""
    digest = hashlib.sha256(str(timestamp).encode()).hexdigest()
    return base64.b64encode(digest.encode()).decode()[:length]


class SecretService:
    """
    Owns .dbpassword and its sentinel under the data directory.

    The sentinel is written after the password, so its presence means the
    password file is complete.
    """

    def __init__(self, data_dir: Path, clock: Optional[Callable[[], float]] = None):
        self.data_dir = data_dir
        self.clock = clock or time.time

    @property
    def secret_path(self) -> Path:
        return self.data_dir / SECRET_FILENAME

    @property
    def sentinel_path(self) -> Path:
        return self.data_dir / SECRET_SENTINEL_FILENAME

    def is_created(self) -> bool:
        """Check if the secret was generated before."""
        return self.sentinel_path.exists()

    def load(self) -> SecretRecord:
        """
        Read the stored secret.

        Raises:
            SecretError: If the password file is missing or empty
        """
        try:
            value = self.secret_path.read_text().strip()
        except OSError as e:
            raise SecretError(
                "Stored database password is unreadable",
                context=f"Path: {self.secret_path}, Error: {e}",
            )

        if not value:
            raise SecretError(
                "Stored database password is empty",
                context=f"Remove {self.sentinel_path} to regenerate",
            )

        return SecretRecord(value=value, path=self.secret_path, created=False)

    def ensure(self) -> SecretRecord:
        """
        Return the secret, generating it on first run only.

        Raises:
            SecretError: If the secret cannot be read or written
        """
        if self.is_created():
            return self.load()

        value = generate_secret(int(self.clock()))

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # Created with its final mode, never readable by others
            fd = os.open(
                self.secret_path,
                os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
                SECRET_FILE_PERMISSIONS,
            )
            with os.fdopen(fd, "w") as f:
                f.write(value)
            # O_CREAT leaves the mode of a leftover file unchanged
            os.chmod(self.secret_path, SECRET_FILE_PERMISSIONS)
            self.sentinel_path.touch()
        except OSError as e:
            raise SecretError(
                "Failed to store database password",
                context=f"Path: {self.secret_path}, Error: {e}",
            )

        return SecretRecord(value=value, path=self.secret_path, created=True)
