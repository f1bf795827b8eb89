"""Public entry points over the copy engine.

Usage:
    from deepclone import anything, must_anything

    # Error-returning form: failure is a value
    clone, error = anything(source)
    if error is not None:
        ...

    # Must-succeed form: failure raises
    clone = must_anything(source)
"""

from __future__ import annotations

import logging
from typing import Any

from deepclone.core.dispatch import copy_value
from deepclone.core.errors import CopyError
from deepclone.core.models import CopyResult
from deepclone.core.registry import CopierRegistry, get_registry
from deepclone.core.types import Copy
from deepclone.core.visited import Visited

logger = logging.getLogger(__name__)


def _copy(value: Any, registry: CopierRegistry | None) -> Any:
    visited = Visited(registry if registry is not None else get_registry())
    return copy_value(value, visited)


def anything[T](value: T, *, registry: CopierRegistry | None = None) -> CopyResult[Copy[T]]:
    """Deep copy any supported value.

    The copy shares no mutable object with value. Objects reached more than
    once (shared or cyclic references) are copied once and the copy keeps the
    same sharing.

    Args:
        value: Value to copy. None copies to None.
        registry: Registry to copy with; the default registry when omitted.

    Returns:
        CopyResult holding the copy, or the error and no value if any part of
        value could not be copied. There is never a partial result.
    """
    try:
        return CopyResult(value=_copy(value, registry))
    except CopyError as e:
        logger.debug("Deep copy of %s failed: %s", type(value).__name__, e)
        return CopyResult(error=e)


def must_anything[T](value: T, *, registry: CopierRegistry | None = None) -> Copy[T]:
    """Deep copy a value known to be supported.

    Same result as anything(); only the failure path differs.

    Raises:
        UnsupportedKindError: If value holds an uncopyable value anywhere.
        TypeMismatchError: If a registered copier rejected the value it was given.
    """
    return anything(value, registry=registry).unwrap()
