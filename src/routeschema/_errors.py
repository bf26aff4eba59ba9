"""routeschema error hierarchy.

All routeschema-specific errors inherit from RouteSchemaError for easy catching.
"""

from pathlib import Path


class RouteSchemaError(Exception):
    """Base error for all routeschema operations."""


class ConfigError(RouteSchemaError):
    """Invalid or missing configuration."""


class ScanError(RouteSchemaError):
    """A directory listing or file read failed while scanning the app directory.

    Attributes:
        path: The directory or file that could not be read.

    """

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class GenerateError(RouteSchemaError):
    """The generated artifact could not be written."""
