"""
Project access for remix-migrate: manifest, configuration and import lists.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validate

from remix_migrate.exceptions import (
    ImportsFileError,
    InvalidConfigError,
    InvalidManifestError,
    ManifestNotFoundError,
)
from remix_migrate.models import ManifestSnapshot, NormalizedImport
from remix_migrate.util.files import read_text, write_text

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schema" / "config.schema.json"


class Project:
    """A Remix project being migrated."""

    CONFIG_NAME = "remix-migrate.yaml"

    DEFAULT_CONFIG = {
        "client": "react",
        "output": {
            "format": "table",
        },
    }

    def __init__(self, root: Path):
        self.root = Path(root)
        self.manifest_file = self.root / "package.json"
        self.config_file = self.root / self.CONFIG_NAME
        self._config_cache: dict[str, Any] | None = None

    def write_default_config(self) -> None:
        """Write the default configuration file."""
        write_text(
            self.config_file,
            yaml.dump(self.DEFAULT_CONFIG, default_flow_style=False, sort_keys=False),
        )

    def load_manifest(self) -> ManifestSnapshot:
        """
        Read package.json.

        Raises:
            ManifestNotFoundError: If the project has no package.json
            InvalidManifestError: If it cannot be parsed
        """
        if not self.manifest_file.exists():
            raise ManifestNotFoundError(str(self.root))

        try:
            data = json.loads(read_text(self.manifest_file))
            return ManifestSnapshot.from_package_json(data)
        except (json.JSONDecodeError, ValueError) as e:
            raise InvalidManifestError(str(self.manifest_file), str(e)) from e

    def load_config(self) -> dict[str, Any]:
        """
        Load configuration merged over the defaults.

        A missing config file is not an error; the defaults apply.

        Raises:
            InvalidConfigError: If the file is not valid YAML or fails the schema
        """
        if self._config_cache is not None:
            return self._config_cache

        config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_file.exists():
            try:
                user_config = yaml.safe_load(read_text(self.config_file))
            except (UnicodeDecodeError, yaml.YAMLError) as e:
                raise InvalidConfigError(f"cannot parse YAML: {e}") from e

            if user_config is None:
                logger.warning(f"Config file is empty: {self.config_file}")
                user_config = {}

            if not isinstance(user_config, dict):
                raise InvalidConfigError(
                    f"expected a mapping, got {type(user_config).__name__}"
                )

            self._validate_config_schema(user_config)
            for key, value in user_config.items():
                if isinstance(value, dict) and isinstance(config.get(key), dict):
                    config[key].update(value)
                else:
                    config[key] = value
            logger.debug(f"Loaded config from {self.config_file}")

        self._config_cache = config
        return config

    def _validate_config_schema(self, config: dict) -> None:
        """Validate config against JSON schema."""
        schema = json.loads(SCHEMA_FILE.read_text())
        try:
            validate(instance=config, schema=schema)
        except ValidationError as e:
            path = ".".join(str(p) for p in e.path)
            raise InvalidConfigError(f"{e.message} (at '{path}')") from e


def load_imports(path: str | Path) -> list[NormalizedImport]:
    """
    Read normalized imports from a JSON or YAML file.

    The file holds a list whose entries are either bare names or
    ``{"name": ..., "isTypeOnly": ...}`` objects.

    Raises:
        ImportsFileError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ImportsFileError(str(path), "file not found")

    try:
        if path.suffix == ".json":
            data = json.loads(read_text(path))
        else:
            data = yaml.safe_load(read_text(path))
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ImportsFileError(str(path), str(e)) from e

    if not isinstance(data, list):
        raise ImportsFileError(str(path), "expected a list of imports")

    try:
        return [NormalizedImport.from_dict(entry) for entry in data]
    except ValueError as e:
        raise ImportsFileError(str(path), str(e)) from e
