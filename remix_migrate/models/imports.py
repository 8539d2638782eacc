"""
Normalized import bindings.
"""

from typing import Any, NamedTuple


class NormalizedImport(NamedTuple):
    """
    One binding imported from the legacy ``remix`` package.

    Attributes:
        name: Exported name as it appears in the legacy package
        is_type_only: True for ``import type`` bindings

    Example:
        >>> NormalizedImport.from_dict({"name": "json", "isTypeOnly": False})
        NormalizedImport(name='json', is_type_only=False)
    """

    name: str
    is_type_only: bool = False

    @classmethod
    def from_dict(cls, data: str | dict[str, Any]) -> "NormalizedImport":
        """
        Parse an import from a bare name or a ``{name, isTypeOnly}`` object.

        Raises:
            ValueError: If the entry has no usable name
        """
        if isinstance(data, str):
            if not data:
                raise ValueError("import name must not be empty")
            return cls(data)

        if not isinstance(data, dict):
            raise ValueError(f"expected a name or an object, got {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"import entry is missing a name: {data!r}")

        type_only = data.get("isTypeOnly", data.get("is_type_only", False))
        return cls(name, bool(type_only))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "isTypeOnly": self.is_type_only}
