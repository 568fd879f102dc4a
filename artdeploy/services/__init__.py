"""
artdeploy Services Layer

Provisioning and lifecycle operations used by the deploy command.
"""

from .compose_service import ComposeBackend
from .fetch_service import FetchService
from .lifecycle_service import LifecycleController
from .manifest_service import ManifestService
from .provisioner import Provisioner
from .proxy_config_service import ProxyConfigService
from .secret_service import SecretService

__all__ = [
    "ComposeBackend",
    "FetchService",
    "LifecycleController",
    "ManifestService",
    "Provisioner",
    "ProxyConfigService",
    "SecretService",
]
