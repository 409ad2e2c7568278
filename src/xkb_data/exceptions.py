"""Errors raised while loading XKB rules files."""

from enum import Enum
from typing import Optional, Union
from pathlib import Path


class ErrorKind(Enum):
    """What went wrong while loading a rules file."""
    ACCESS = "access"
    MALFORMED_DATA = "malformed_data"


class RulesSchemaError(ValueError):
    """The XML document does not match the rules registry schema."""
    pass


class RulesError(OSError):
    """Base class for rules loading failures.

    Attributes:
        kind: ErrorKind tag telling access failures from malformed data
        path: Path of the rules file that failed to load
        message: Human-readable description of the failure
    """

    kind: ErrorKind

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        return self.message


class RulesAccessError(RulesError):
    """The rules file does not exist or cannot be read."""

    kind = ErrorKind.ACCESS

    def __init__(self, path: Union[str, Path], cause: OSError):
        strerror = cause.strerror or str(cause)
        super().__init__(f"Cannot read rules file {path}: {strerror}", path)
        self.errno = cause.errno
        self.strerror = strerror
        self.filename = str(path)

    def __reduce__(self):
        return (type(self), (self.path, OSError(self.errno, self.strerror)))


class MalformedRulesError(RulesError):
    """The rules file was read but its content is not a valid registry."""

    kind = ErrorKind.MALFORMED_DATA

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Malformed rules data in {path}: {reason}", path)
        self.reason = reason

    def __reduce__(self):
        return (type(self), (self.path, self.reason))
