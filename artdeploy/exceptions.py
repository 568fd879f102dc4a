"""
artdeploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
Every error is terminal: the command prints it and exits with status 1.
"""

from typing import Iterable, Optional


class ArtdeployError(Exception):
    """Base exception for all artdeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class PlatformError(ArtdeployError):
    """Raised when the host cannot run the deployment."""

    pass


class UnsupportedPlatformError(PlatformError):
    """Raised for operating system families other than Linux and Darwin."""

    def __init__(self, family: str):
        self.family = family
        super().__init__(
            f"Unsupported platform '{family or 'unknown'}'",
            context="Supported platforms: Linux, Darwin",
        )


class PrivilegeRequiredError(PlatformError):
    """Raised when root is required but the process is unprivileged."""

    def __init__(self, family: str):
        self.family = family
        super().__init__(
            f"Root privileges are required on {family}",
            context="Run again with sudo",
        )


class OptionError(ArtdeployError):
    """Raised when command-line input is invalid."""

    pass


class InvalidOptionError(OptionError):
    """Raised for unknown flags or unusable flag values."""

    pass


class InvalidActionError(OptionError):
    """Raised when the requested action is not a known lifecycle action."""

    def __init__(self, action: str, allowed: Iterable[str]):
        self.action = action
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid action '{action}'",
            context=f"Valid actions: {', '.join(self.allowed)}",
        )


class StateError(ArtdeployError):
    """Raised when the live stack state forbids the requested operation."""

    pass


class UnsafeStateTransitionError(StateError):
    """Raised when a clean is requested while the stack is running."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            f"Cannot {action} with clean while Artifactory is running",
            context="Stop it first: artdeploy -a stop",
        )


class BackendError(ArtdeployError):
    """Raised when the orchestration backend cannot be used."""

    pass


class BackendUnavailableError(BackendError):
    """Raised when the compose binary or descriptor is missing."""

    pass


class BackendCommandError(BackendError):
    """Raised when a backend invocation exits non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        context = f"Exit code: {returncode}"
        if stderr:
            context += f", Error: {stderr.strip()}"
        super().__init__(f"Backend command failed: {command}", context=context)


class ProvisioningError(ArtdeployError):
    """Raised when preparing the host for a start fails."""

    pass


class FetchFailedError(ProvisioningError):
    """Raised when a dependency download fails."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Failed to download {url}", context=reason)


class PatchFailedError(ProvisioningError):
    """Raised when the compose manifest cannot be patched."""

    pass


class SecretError(ProvisioningError):
    """Raised when the stored database password cannot be read or written."""

    pass
