from __future__ import annotations


class SumtreeError(Exception):
    """Base class for errors tied to a single path."""

    def __init__(self, path, message: str = ""):
        self.path = path
        super().__init__(message or str(path))


class DigestError(SumtreeError):
    pass


class OpenError(DigestError):
    """Raised when a file cannot be opened for hashing."""


class ReadError(DigestError):
    """Raised when reading fails part way through a file."""


class SidecarReadError(SumtreeError):
    """Raised when a sidecar exists but cannot be read."""


class SidecarWriteError(SumtreeError):
    """Raised in strict mode when a new sidecar cannot be written."""


class ManifestLoadError(SumtreeError):
    """Raised when the reference manifest is missing or unreadable. Fatal."""


class ConfigError(Exception):
    pass
