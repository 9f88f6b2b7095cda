"""Error types raised by metanno's outer surfaces.

The closure core never raises for degraded input: unresolved usages,
missing declarations and invalid targets all produce negative or empty
answers.  The errors below belong to the layers that read graph documents
and configuration from disk.
"""
from __future__ import annotations


class GraphFormatError(ValueError):
    """Raised when a graph document does not have the expected shape.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    location:
        Dotted key path of the offending entry, e.g.
        ``"annotations.test.Foo[2]"``.  Empty for document-level problems.
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.location = location
        self.detail = message
        text = f"{location}: {message}" if location else message
        super().__init__(text)


class GraphLoadError(OSError):
    """Raised when a graph document cannot be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load type graph from {path}: {reason}")

    def __str__(self) -> str:
        return f"Cannot load type graph from {self.path}: {self.reason}"


class ConfigError(ValueError):
    """Raised when resolver configuration is invalid."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Invalid configuration value for {key!r}: {message}")
