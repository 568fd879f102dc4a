"""
Lifecycle Service

Maps each lifecycle action to its compose invocation(s).
"""

from typing import Dict, List, Tuple

from artdeploy.exceptions import BackendCommandError
from artdeploy.models.deployment import Action
from artdeploy.models.results import ExecutionResult
from artdeploy.services.compose_service import ComposeBackend

# Action -> ordered compose argument lists
ACTION_COMMANDS: Dict[Action, Tuple[Tuple[str, ...], ...]] = {
    Action.START: (("up", "-d", "--remove-orphans"),),
    Action.STOP: (("stop",),),
    Action.RESTART: (("restart",),),
    Action.STATUS: (("ps",),),
    Action.REMOVE: (("stop",), ("rm", "-f")),
    Action.LOGS: (("logs", "-t"),),
}

# Actions whose output belongs on the terminal
STREAMED_ACTIONS = frozenset({Action.STATUS, Action.LOGS})

DESCRIPTIONS = {
    Action.START: "Starting Artifactory",
    Action.STOP: "Stopping Artifactory",
    Action.RESTART: "Restarting Artifactory",
    Action.STATUS: "Artifactory status",
    Action.REMOVE: "Removing Artifactory",
    Action.LOGS: "Artifactory logs",
}


class LifecycleController:
    """Dispatches a validated action to the backend."""

    def __init__(self, backend: ComposeBackend):
        self.backend = backend

    @staticmethod
    def commands_for(action: Action) -> List[Tuple[str, ...]]:
        """Compose argument lists for an action."""
        return list(ACTION_COMMANDS[action])

    def dispatch(self, action: Action) -> List[ExecutionResult]:
        """
        Run the backend invocation(s) for an action.

        Raises:
            BackendUnavailableError: If the manifest is missing
            BackendCommandError: If any invocation exits non-zero
        """
        self.backend.ensure_manifest()

        stream = action in STREAMED_ACTIONS
        description = DESCRIPTIONS[action]
        results = []

        for args in self.commands_for(action):
            result = self.backend.run(args, description, stream=stream)
            results.append(result)
            if result.is_failure:
                raise BackendCommandError(
                    result.command, result.returncode, result.stderr
                )

        return results
