"""
Custom exceptions for remix-migrate with helpful error messages.
"""


class MigrateError(Exception):
    """Base exception for remix-migrate errors."""

    def __init__(self, message: str, suggestion: str = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self):
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class ProjectError(MigrateError):
    """Errors related to reading the target project."""

    pass


class ManifestNotFoundError(ProjectError):
    """No package.json in the project directory."""

    def __init__(self, path: str):
        message = f"No package.json found at: {path}"
        suggestion = (
            "Run the migration from your Remix project root, or point at it with:\n"
            "  remix-migrate resolve --project <project-dir>"
        )
        super().__init__(message, suggestion)


class InvalidManifestError(ProjectError):
    """package.json could not be parsed."""

    def __init__(self, path: str, error_details: str):
        message = f"Invalid package.json at {path}: {error_details}"
        suggestion = (
            "Check that package.json is valid JSON and that 'dependencies' "
            "and 'scripts' are objects."
        )
        super().__init__(message, suggestion)


class ImportsFileError(ProjectError):
    """Normalized imports file is missing or malformed."""

    def __init__(self, path: str, error_details: str):
        message = f"Cannot read imports from {path}: {error_details}"
        suggestion = (
            "The imports file must be a JSON or YAML list of names or objects:\n"
            '  [{"name": "json", "isTypeOnly": false}, "useLoaderData"]'
        )
        super().__init__(message, suggestion)


class ResolutionError(MigrateError):
    """Errors while resolving the migration target."""

    pass


class MultipleAdaptersError(ResolutionError):
    """More than one server adapter is listed in dependencies."""

    def __init__(self, packages: list[str]):
        self.packages = list(packages)
        message = f"Found multiple Remix server adapters in dependencies: {','.join(packages)}"
        suggestion = (
            "You should only need one Remix server adapter. "
            "Uninstall unused server adapter packages and try again."
        )
        super().__init__(message, suggestion)


class ConfigurationError(MigrateError):
    """Configuration file errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Configuration file is invalid."""

    def __init__(self, error_details: str):
        message = f"Invalid configuration file: {error_details}"

        suggestion = (
            "Fix the remix-migrate.yaml file.\n"
            "You can regenerate the default configuration:\n"
            "  mv remix-migrate.yaml remix-migrate.yaml.backup\n"
            "  remix-migrate init .\n\n"
            "Then merge your settings back from the backup."
        )
        super().__init__(message, suggestion)


class UnknownClientError(ConfigurationError):
    """Client package is not one of the known client packages."""

    def __init__(self, client: str, available: list[str]):
        message = f"Unknown client package: {client}"
        choices = "\n  - ".join(available)
        suggestion = f"Client must be one of:\n  - {choices}"
        super().__init__(message, suggestion)


def format_error_for_cli(error: Exception) -> str:
    """
    Format an exception for CLI display with helpful information.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, MigrateError):
        output = f"[red]Error:[/red] {error.message}"
        if error.suggestion:
            output += f"\n\n[yellow]{error.suggestion}[/yellow]"
        return output
    else:
        return f"[red]Error:[/red] {str(error)}"
