"""Canonical enums for smell attributes.

StrEnum values compare equal to their string values (Severity.HIGH == "high").
"""

from __future__ import annotations

import enum


class Severity(enum.StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Dialect(enum.StrEnum):
    FLOW = "flow"
    TYPESCRIPT = "typescript"


class FileEvent(enum.StrEnum):
    ADD = "add"
    CHANGE = "change"


__all__ = ["Dialect", "FileEvent", "Severity"]
