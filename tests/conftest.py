"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path

import pytest

from remix_migrate.models import ManifestSnapshot, NormalizedImport
from remix_migrate.project import Project


def write_package_json(root: Path, dependencies=None, postinstall=None) -> Path:
    """Write a minimal package.json into root."""
    data = {"name": "my-remix-app", "private": True}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if postinstall is not None:
        data["scripts"] = {"postinstall": postinstall}
    path = root / "package.json"
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def make_project(tmp_path):
    """Return a factory creating a project directory with a package.json."""

    def _make(dependencies=None, postinstall=None) -> Project:
        write_package_json(tmp_path, dependencies, postinstall)
        return Project(tmp_path)

    return _make


@pytest.fixture
def manifest():
    """Return a factory for ManifestSnapshot objects."""

    def _manifest(dependencies=None, postinstall=None) -> ManifestSnapshot:
        return ManifestSnapshot.from_package_json(
            {
                "dependencies": dependencies or {},
                "scripts": {"postinstall": postinstall} if postinstall else {},
            }
        )

    return _manifest


@pytest.fixture
def sample_imports():
    """Imports typical of a Remix 1.x app using the express adapter."""
    return [
        NormalizedImport("createRequestHandler"),
        NormalizedImport("useLoaderData"),
        NormalizedImport("LoaderFunction", is_type_only=True),
        NormalizedImport("json"),
        NormalizedImport("Link"),
        NormalizedImport("MetaFunction", is_type_only=True),
        NormalizedImport("unstable_somethingNew"),
    ]


@pytest.fixture
def package_json(tmp_path):
    """Return a function writing package.json into tmp_path."""

    def _write(dependencies=None, postinstall=None) -> Path:
        return write_package_json(tmp_path, dependencies, postinstall)

    return _write
