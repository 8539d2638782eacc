"""
Snapshot of the package.json fields needed to pick a migration target.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _string_mapping(value: Any, key: str) -> Mapping[str, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object, got {type(value).__name__}")
    return MappingProxyType({str(k): str(v) for k, v in value.items()})


@dataclass(frozen=True)
class ManifestSnapshot:
    """
    Read-only view of a project manifest.

    Attributes:
        dependencies: Package name to version range, in manifest order
        postinstall: The ``scripts.postinstall`` command, if any
        dev_dependencies: Package name to version range for devDependencies.
            Kept for reporting; target inference only looks at ``dependencies``.
    """

    dependencies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    postinstall: str | None = None
    dev_dependencies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_package_json(cls, data: dict[str, Any]) -> "ManifestSnapshot":
        """
        Build a snapshot from parsed package.json content.

        Args:
            data: Parsed JSON object

        Returns:
            ManifestSnapshot

        Raises:
            ValueError: If a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        scripts = data.get("scripts") or {}
        if not isinstance(scripts, dict):
            raise ValueError(f"'scripts' must be an object, got {type(scripts).__name__}")

        postinstall = scripts.get("postinstall")
        if postinstall is not None and not isinstance(postinstall, str):
            raise ValueError("'scripts.postinstall' must be a string")

        return cls(
            dependencies=_string_mapping(data.get("dependencies"), "dependencies"),
            postinstall=postinstall,
            dev_dependencies=_string_mapping(data.get("devDependencies"), "devDependencies"),
        )
