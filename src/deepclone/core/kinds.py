"""Shape classification of runtime values.

Usage:
    classify(42)                    # Kind.OPAQUE
    classify([1, 2])                # Kind.SLICE
    classify(Point(1, 2))           # Kind.POINTER (dataclass instance)
    classify(lambda: None)          # Kind.FUNC
    classify(stamp, (datetime,))    # Kind.OPAQUE (registered leaf type)
"""

from __future__ import annotations

import asyncio
import io
import queue
import socket
import threading
import types
import weakref
from collections import deque
from concurrent.futures import Future
from dataclasses import is_dataclass
from functools import lru_cache, partial
from typing import Any

from deepclone.core.models import Kind

_ATOMIC_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    range,
    slice,
    type(Ellipsis),
    type(NotImplemented),
    type,
    types.CodeType,
)

_FUNC_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    partial,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
)

_CHAN_TYPES: tuple[type, ...] = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    socket.socket,
)

_HANDLE_TYPES: tuple[type, ...] = (
    io.IOBase,
    type(threading.Lock()),
    type(threading.RLock()),
    types.ModuleType,
    types.FrameType,
    types.TracebackType,
    weakref.ReferenceType,
    *weakref.ProxyTypes,
    Future,
    asyncio.Future,
)

_SLICE_TYPES: tuple[type, ...] = (list, bytearray, deque)


def classify(value: Any, opaque_types: tuple[type, ...] = ()) -> Kind:
    """Determine the Kind of a value from its concrete type.

    Args:
        value: Any runtime value.
        opaque_types: Additional types (and their subclasses) copied as leaves.

    Returns:
        The value's Kind. Never raises; unsupported values get FUNC, CHAN or HANDLE.
    """
    cls = type(value)
    if isinstance(value, _ATOMIC_TYPES) or issubclass(cls, opaque_types):
        return Kind.OPAQUE
    if isinstance(value, _FUNC_TYPES):
        return Kind.FUNC
    if isinstance(value, _CHAN_TYPES):
        return Kind.CHAN
    if isinstance(value, _HANDLE_TYPES):
        return Kind.HANDLE
    if isinstance(value, tuple):
        return Kind.STRUCT if is_named_tuple(cls) else Kind.ARRAY
    if isinstance(value, _SLICE_TYPES):
        return Kind.SLICE
    if isinstance(value, dict):
        return Kind.MAP
    if isinstance(value, (set, frozenset)):
        return Kind.SET
    if customizes_copy(cls) or cls.__new__ is not object.__new__:
        return Kind.INTERFACE
    if hasattr(value, "__dict__") or slot_names(cls):
        return Kind.POINTER
    return Kind.INTERFACE


def is_named_tuple(cls: type) -> bool:
    """Check if a tuple subclass was built by namedtuple() or typing.NamedTuple."""
    return issubclass(cls, tuple) and hasattr(cls, "_fields") and hasattr(cls, "_make")


def customizes_copy(cls: type) -> bool:
    """Check if a class takes part in its own copying via __deepcopy__ or pickling hooks.

    Args:
        cls: Class to inspect.

    Returns:
        True if instances must be copied through the type's own protocol.
    """
    if getattr(cls, "__deepcopy__", None) is not None:
        return True
    if cls.__reduce_ex__ is not object.__reduce_ex__ or cls.__reduce__ is not object.__reduce__:
        return True
    if is_dataclass(cls):
        # Frozen slotted dataclasses get generated __getstate__/__setstate__
        return False
    getstate = getattr(cls, "__getstate__", object.__getstate__)
    return getstate is not object.__getstate__ or hasattr(cls, "__setstate__")


@lru_cache(maxsize=None)
def slot_names(cls: type) -> tuple[str, ...]:
    """Collect instance slot attribute names from base class to subclass.

    Private slot names are returned in their mangled form.
    """
    names: list[str] = []
    for base in reversed(cls.__mro__):
        slots = vars(base).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{base.__name__.lstrip('_')}{name}"
            if name not in names:
                names.append(name)
    return tuple(names)
