"""
Data models for migration inputs.

Modules:
- manifest: ManifestSnapshot read from package.json
- imports: NormalizedImport bindings produced by the import analyzer
"""

from remix_migrate.models.imports import NormalizedImport
from remix_migrate.models.manifest import ManifestSnapshot

__all__ = ["ManifestSnapshot", "NormalizedImport"]
