"""
artdeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .deployment import (
    Action,
    DeploymentConfig,
    PlatformInfo,
    SecretRecord,
    PROBED_ACTIONS,
    CLEAN_ACTIONS,
)
from .results import (
    ExecutionResult,
    ProvisionResult,
)

__all__ = [
    # Deployment
    "Action",
    "DeploymentConfig",
    "PlatformInfo",
    "SecretRecord",
    "PROBED_ACTIONS",
    "CLEAN_ACTIONS",
    # Results
    "ExecutionResult",
    "ProvisionResult",
]
