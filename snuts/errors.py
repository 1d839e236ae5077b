"""Error taxonomy for parsing and detection.

Every error here is recovered at the smallest scope (per file or per
detector); none of them stop a watch session.
"""

from __future__ import annotations


class SnutsError(Exception):
    """Base class for recoverable analysis errors."""


class EmptyInputError(SnutsError):
    """Source text is empty or whitespace-only."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"Source text is empty{where}")


class ParseError(SnutsError):
    """Every grammar dialect failed to parse the source."""

    def __init__(self, dialects: tuple[str, ...], path: str | None = None) -> None:
        self.dialects = dialects
        self.path = path
        where = f" {path}" if path else " source"
        super().__init__(
            f"Unable to parse{where} with any dialect ({', '.join(dialects)})"
        )


class UnreadableFileError(SnutsError):
    """I/O failure while reading a source file."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to read {path}: {cause}")


class DetectorFailure(SnutsError):
    """A detector raised, or broke its return contract, while analyzing a file."""

    def __init__(self, detector: str, path: str, cause: BaseException | str) -> None:
        self.detector = detector
        self.path = path
        self.cause = cause
        super().__init__(f"Detector {detector} failed on {path}: {cause}")


__all__ = [
    "DetectorFailure",
    "EmptyInputError",
    "ParseError",
    "SnutsError",
    "UnreadableFileError",
]
