"""
Manifest Service

Structured patching of the compose descriptor: host paths of data volumes,
the database driver mount and the database password.

Patches are keyed on container-side mount targets and environment keys,
so patching an already patched manifest changes nothing.
"""

import copy
import re
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import yaml

from artdeploy.constants import CREDENTIAL_KEYS, VOLUME_TARGETS
from artdeploy.exceptions import PatchFailedError
from artdeploy.logger import DeployLogger

BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


class ManifestLoader(yaml.SafeLoader):
    """
    SafeLoader that resolves booleans and numbers by YAML 1.2 rules.

    Compose reads YAML 1.2, so `yes`, `on` and `2222:22` are strings there
    and must stay strings through a load/dump round trip.
    """


ManifestLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (BOOL_TAG, INT_TAG, FLOAT_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ManifestLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
ManifestLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*)|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
ManifestLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+0123456789."),
)


def host_path_for(target: str, data_dir: Path, driver_jar: str) -> Optional[str]:
    """Host path a container mount target should bind, or None to leave it."""
    normalized = target.rstrip("/") or "/"

    if PurePosixPath(normalized).name == driver_jar:
        return str(data_dir / driver_jar)

    subpath = VOLUME_TARGETS.get(normalized)
    if subpath:
        return str(data_dir.joinpath(*subpath))

    return None


def _patch_volume(volume: Any, data_dir: Path, driver_jar: str) -> Any:
    # Long syntax: {type: bind, source: ..., target: ...}
    if isinstance(volume, dict):
        target = volume.get("target")
        if not isinstance(target, str):
            return volume
        host = host_path_for(target, data_dir, driver_jar)
        if host is None:
            return volume
        patched = dict(volume)
        patched["source"] = host
        return patched

    # Short syntax: host:container[:mode]
    if isinstance(volume, str):
        parts = volume.split(":")
        if len(parts) < 2:
            return volume
        host = host_path_for(parts[1], data_dir, driver_jar)
        if host is None:
            return volume
        return ":".join([host, *parts[1:]])

    return volume


def _patch_environment(environment: Any, secret: str) -> Any:
    if isinstance(environment, dict):
        patched = dict(environment)
        for key in CREDENTIAL_KEYS:
            if key in patched:
                patched[key] = secret
        return patched

    if isinstance(environment, list):
        patched_list = []
        for entry in environment:
            if isinstance(entry, str) and "=" in entry:
                key = entry.split("=", 1)[0]
                if key in CREDENTIAL_KEYS:
                    entry = f"{key}={secret}"
            patched_list.append(entry)
        return patched_list

    return environment


def patch_manifest(
    document: Any, data_dir: Path, secret: str, driver_jar: str
) -> Dict[str, Any]:
    """
    Return a patched copy of a parsed compose document.

    Raises:
        PatchFailedError: If the document has no services mapping
    """
    if not isinstance(document, dict) or not isinstance(
        document.get("services"), dict
    ):
        raise PatchFailedError(
            "Compose file has no services mapping",
            context="Expected a top-level 'services:' key",
        )

    patched = copy.deepcopy(document)

    for service in patched["services"].values():
        if not isinstance(service, dict):
            continue

        volumes = service.get("volumes")
        if isinstance(volumes, list):
            service["volumes"] = [
                _patch_volume(volume, data_dir, driver_jar) for volume in volumes
            ]

        if "environment" in service:
            service["environment"] = _patch_environment(service["environment"], secret)

    return patched


def render_manifest(document: Dict[str, Any]) -> str:
    """Serialize a compose document deterministically."""
    return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)


def patch_manifest_text(
    template: str, data_dir: Path, secret: str, driver_jar: str
) -> str:
    """
    Patch compose YAML text.

    Raises:
        PatchFailedError: If the text is not valid YAML or lacks services
    """
    try:
        document = yaml.load(template, Loader=ManifestLoader)
    except yaml.YAMLError as e:
        raise PatchFailedError("Compose file is not valid YAML", context=str(e))

    return render_manifest(patch_manifest(document, data_dir, secret, driver_jar))


class ManifestService:
    """Patches the compose file on disk."""

    def __init__(self, manifest_path: Path, logger: Optional[DeployLogger] = None):
        self.manifest_path = manifest_path
        self.logger = logger

    def patch(self, data_dir: Path, secret: str, driver_jar: str) -> None:
        """
        Rewrite the manifest in place.

        Raises:
            PatchFailedError: If reading, parsing or writing fails
        """
        try:
            template = self.manifest_path.read_text()
        except OSError as e:
            raise PatchFailedError(
                "Failed to read compose file",
                context=f"Path: {self.manifest_path}, Error: {e}",
            )

        patched = patch_manifest_text(template, data_dir, secret, driver_jar)

        try:
            self.manifest_path.write_text(patched)
        except OSError as e:
            raise PatchFailedError(
                "Failed to write compose file",
                context=f"Path: {self.manifest_path}, Error: {e}",
            )

        if self.logger:
            self.logger.log(f"Patched {self.manifest_path} for {data_dir}")
