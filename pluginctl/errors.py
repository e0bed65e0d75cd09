"""
Error Taxonomy.

Every failure raised by pluginctl derives from PluginctlError so that the CLI
can turn it into a one-line message and a non-zero exit code.
"""


class PluginctlError(Exception):
    """Base exception for pluginctl errors."""

    pass


class ConfigurationError(PluginctlError):
    """Raised when the site URL or credentials are missing or malformed."""

    pass


class ManifestError(PluginctlError):
    """Raised when the plugin manifest cannot be read or parsed."""

    pass


class ManifestNotFoundError(ManifestError):
    """Raised when no plugin.json can be located."""

    pass


class VersionParseError(PluginctlError):
    """Raised when a string is not a valid semantic version."""

    pass


class InvalidModeError(PluginctlError):
    """Raised for a bump mode other than major, minor or patch."""

    pass


class FileWriteError(PluginctlError):
    """Raised when the manifest or a generated file cannot be written."""

    pass


class FileOpenError(PluginctlError):
    """Raised when a local bundle cannot be opened."""

    pass


class ProcessExecutionError(PluginctlError):
    """
    Raised when an external process cannot be launched or exits non-zero.

    Attributes:
        output: Combined stdout/stderr captured from the process
        returncode: Exit status, or None if the process never started
    """

    def __init__(self, message: str, output: str = "", returncode: int | None = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode


class RemoteError(PluginctlError):
    """
    Raised when the plugin server rejects a request or cannot be reached.

    Attributes:
        status_code: HTTP status code, or None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
