"""Exceptions for the Smart Storage Array exporter."""


class ExporterError(Exception):
    """Base exception for the exporter."""


class CommandError(ExporterError):
    """Raised when the management tool cannot be run or exits non-zero."""

    def __init__(self, message, args=None, returncode=None, stderr=None):
        super().__init__(message)
        self.command_args = list(args) if args else []
        self.returncode = returncode
        self.stderr = stderr


class ConfigurationError(ExporterError):
    """Raised when exporter settings are invalid."""
