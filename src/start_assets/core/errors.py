"""Exception taxonomy for the asset resolution engine.

Matching and parsing errors are deterministic input errors and are raised
straight to the caller. CLI entry points translate every StartAssetsError
into a clean "Error: ..." message (see cli/error_boundary.py).
"""


class StartAssetsError(Exception):
    """Base class for all well-known engine errors."""


class NotFoundError(StartAssetsError):
    """No candidates for a name, search, or configuration directory."""


class NoDocumentsError(NotFoundError):
    """A configuration directory exists but holds no documents."""


class AmbiguousError(StartAssetsError):
    """A query matched several candidates at the same match tier."""

    def __init__(self, message: str, candidates: list[str]) -> None:
        super().__init__(message)
        self.candidates = candidates


class ValidationError(StartAssetsError):
    """Query too short, malformed pattern, or bad selection input."""


class TerminalRequiredError(StartAssetsError):
    """An interactive step was reached without a terminal attached."""


class TransportError(StartAssetsError):
    """The registry could not be reached or returned unusable data."""


class StoreError(StartAssetsError):
    """A stored document exists but cannot be parsed or written."""


class BatchInstallError(StartAssetsError):
    """One or more queries in a multi-query install failed.

    Attributes:
        failures: (query, error) pairs in argument order
    """

    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        lines = [f"{query}: {error}" for query, error in failures]
        super().__init__("\n".join(lines))
        self.failures = failures
