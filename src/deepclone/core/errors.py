"""Errors raised by the copy engine."""

from __future__ import annotations

import reprlib
from typing import Any

from deepclone.core.models import Kind


class CopyError(TypeError):
    """Base class for failures of a deep copy."""

    pass


class UnsupportedKindError(CopyError):
    """Raised when no copier exists for a value's kind, or the value refuses to be copied."""

    def __init__(self, value: Any, kind: Kind, reason: str | None = None) -> None:
        self.value = value
        self.kind = kind
        message = f"Cannot copy {reprlib.repr(value)} of kind {kind.name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TypeMismatchError(CopyError):
    """Raised when a copier is invoked on a value of a different kind."""

    def __init__(self, expected: Kind, actual: Kind, value: Any) -> None:
        self.expected = expected
        self.actual = actual
        self.value = value
        super().__init__(
            f"{expected.name} copier cannot copy {reprlib.repr(value)} of kind {actual.name}"
        )


class PartialCopyWarning(UserWarning):
    """Issued when configuration causes attributes to be left out of a copy."""

    pass
