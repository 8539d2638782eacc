"""
Route imports from the legacy ``remix`` package to the split packages.

Each import goes to the first package, in the order adapter, client, runtime,
whose export table lists its name. Anything left over stays on the legacy
package.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from remix_migrate.models import NormalizedImport
from remix_migrate.packages import (
    LEGACY_BUCKET,
    PACKAGE_EXPORTS,
    Adapter,
    Client,
    PackageIdentifier,
    Runtime,
    package_specifier,
)


class ClassifiedImports(Mapping):
    """
    Read-only mapping of bucket key to the imports routed there.

    Keys are the adapter (when one was given), client and runtime values,
    followed by ``"legacy"``. Each value is a tuple in input order.

    Example:
        >>> result = classify_imports(
        ...     [NormalizedImport("json"), NormalizedImport("Link")],
        ...     client=Client.REACT,
        ...     runtime=Runtime.NODE,
        ... )
        >>> [i.name for i in result["react"]], [i.name for i in result["node"]]
        (['Link'], ['json'])
    """

    def __init__(self, buckets: dict[str, tuple[NormalizedImport, ...]]):
        self._buckets = MappingProxyType(dict(buckets))

    def __getitem__(self, key: str) -> tuple[NormalizedImport, ...]:
        return self._buckets[str(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return f"ClassifiedImports({dict(self._buckets)!r})"

    def bucket_of(self, name: str) -> str | None:
        """Return the bucket an import name was routed to."""
        for key, imports in self._buckets.items():
            if any(imp.name == name for imp in imports):
                return key
        return None

    def specifiers(self) -> dict[str, tuple[NormalizedImport, ...]]:
        """Non-empty buckets keyed by the module specifier to import from."""
        return {package_specifier(key): imports for key, imports in self._buckets.items() if imports}

    def to_dict(self) -> dict[str, list[dict]]:
        return {key: [imp.to_dict() for imp in imports] for key, imports in self._buckets.items()}


def classify_imports(
    imports: Iterable[NormalizedImport],
    client: Client,
    runtime: Runtime,
    adapter: Adapter | None = None,
) -> ClassifiedImports:
    """
    Partition imports into per-package buckets.

    Args:
        imports: Imports from the legacy package, in source order
        client: Client package the project uses
        runtime: Resolved runtime
        adapter: Resolved server adapter, if any

    Returns:
        ClassifiedImports where every input import appears in exactly one bucket
    """
    packages: list[PackageIdentifier] = [client, runtime]
    if adapter is not None:
        packages.insert(0, adapter)

    buckets: dict[str, list[NormalizedImport]] = {str(p): [] for p in packages}
    buckets[LEGACY_BUCKET] = []

    for imp in imports:
        owner = next((p for p in packages if PACKAGE_EXPORTS[p].provides(imp.name)), None)
        key = str(owner) if owner is not None else LEGACY_BUCKET
        buckets[key].append(imp)

    return ClassifiedImports({key: tuple(items) for key, items in buckets.items()})
