"""Errors raised by the export flow.

Every failure aborts the run; the CLI is the only place that catches them.
"""

from __future__ import annotations

from pathlib import Path


class StackExportError(Exception):
    """Base class for all expected failures."""


class ConfigError(StackExportError):
    """The input configuration could not be read or is invalid."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class StackExchangeApiError(StackExportError):
    """The API answered with an error payload."""

    def __init__(
        self,
        *,
        error_id: int,
        error_name: str,
        error_message: str,
        status_code: int | None = None,
    ) -> None:
        self.error_id = error_id
        self.error_name = error_name
        self.error_message = error_message
        self.status_code = status_code
        super().__init__(f"{error_name}: {error_message}")


class TransportError(StackExportError):
    """Network failure or an unusable (non-JSON, non-2xx) response."""


class ExportError(StackExportError):
    """The output file could not be written."""
