"""Errors raised while building or parsing a declaration document.

Every error carries an `ErrorKind` and a structured payload. The human-readable
message is produced by `format()`, so callers can match on the kind and payload
instead of the message text.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import override


class ErrorKind(Enum):
    """Kinds of compilation errors."""

    DUPLICATE_DECLARATION = "duplicate-declaration"
    MISSING_BASE = "missing-base"
    SINGLE_INSTANCE_VIOLATION = "single-instance-violation"
    NOT_FOUND = "not-found"
    SCHEMA_SHAPE = "schema-shape"


class XapiStubError(Exception):
    """Base class for all errors of the stub generator."""

    kind: ErrorKind

    def __init__(self):
        super().__init__(self.format())

    def format(self) -> str:
        """Format the error for display."""
        raise NotImplementedError

    @override
    def __str__(self) -> str:
        return self.format()


class DuplicateDeclarationError(XapiStubError):
    """An interface with the same name is already registered."""

    kind = ErrorKind.DUPLICATE_DECLARATION

    def __init__(self, name: str):
        self.name = name
        super().__init__()

    @override
    def format(self) -> str:
        return f"Interface already exists: {self.name}"


class MissingBaseError(XapiStubError):
    """One or more base interfaces of a new interface are not registered."""

    kind = ErrorKind.MISSING_BASE

    def __init__(self, name: str, missing: Sequence[str]):
        self.name = name
        self.missing = tuple(missing)
        super().__init__()

    @override
    def format(self) -> str:
        return f"Cannot add interface {self.name} due to missing interfaces: {', '.join(self.missing)}"


class SingleInstanceViolationError(XapiStubError):
    """A second main class was requested."""

    kind = ErrorKind.SINGLE_INSTANCE_VIOLATION

    def __init__(self, name: str):
        self.name = name
        super().__init__()

    @override
    def format(self) -> str:
        return f"Main class already defined, cannot add {self.name}"


class NotFoundError(XapiStubError):
    """A required declaration does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, what: str):
        self.what = what
        super().__init__()

    @override
    def format(self) -> str:
        return f"No {self.what} defined"


class SchemaShapeError(XapiStubError):
    """A part of the input schema does not have the expected shape."""

    kind = ErrorKind.SCHEMA_SHAPE

    def __init__(self, path: Sequence[str], reason: str):
        self.path = tuple(path)
        self.reason = reason
        super().__init__()

    @override
    def format(self) -> str:
        location = ".".join(self.path) if self.path else "<schema>"
        return f"Invalid schema at {location}: {self.reason}"
