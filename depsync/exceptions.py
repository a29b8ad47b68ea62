"""Custom exceptions for depsync."""


class DepsyncError(Exception):
    """Base exception for all depsync errors."""


class ConfigurationError(DepsyncError):
    """Raised when a setting is missing or has an invalid value."""


class ManifestError(DepsyncError):
    """Base class for manifest (package.json) failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when the project root has no package.json."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"manifest not found: {path}")


class ManifestParseError(ManifestError):
    """Raised when package.json is not a valid JSON object."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot parse manifest {path}: {reason}")


class SourceDiscoveryError(DepsyncError):
    """Raised when the source tree cannot be walked."""


class OracleError(DepsyncError):
    """Raised when the download-statistics endpoint gives no usable answer."""
