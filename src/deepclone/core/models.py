"""Copy models: shape kinds, copier protocol, and copy results.

Every value the engine sees falls into exactly one Kind. Kinds with a copier
in the registry are copyable; the rest (FUNC, CHAN, HANDLE) are rejected.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from deepclone.core.errors import CopyError
    from deepclone.core.visited import Visited


class Kind(Enum):
    """Structural category of a runtime value."""

    OPAQUE = auto()  # Immutable leaf, copied by returning it
    POINTER = auto()  # Instance reached by reference, state in __dict__/__slots__
    INTERFACE = auto()  # Copied through the type's own copy/pickle protocol
    ARRAY = auto()  # tuple: fixed length, element-owned
    SLICE = auto()  # list, bytearray, deque
    MAP = auto()  # dict and subclasses
    STRUCT = auto()  # named tuples
    SET = auto()  # set, frozenset
    FUNC = auto()  # functions, methods, generators, coroutines
    CHAN = auto()  # queues, sockets
    HANDLE = auto()  # files, locks, modules, frames, weak references

    @property
    def referenceable(self) -> bool:
        """Whether values of this kind carry an identity tracked during a copy."""
        return self in _REFERENCEABLE


_REFERENCEABLE = frozenset({Kind.POINTER, Kind.INTERFACE, Kind.SLICE, Kind.MAP, Kind.SET})


class Copier(Protocol):
    """Copy routine for one shape.

    Receives the source value and the visited tracker of the running copy (or
    None when invoked directly) and returns the copy.
    """

    def __call__(self, value: Any, visited: Visited | None, /) -> Any: ...


@dataclass(frozen=True)
class CopyResult[T]:
    """Outcome of one top-level copy: either a value or the error that stopped it.

    Unpacks like a pair:

        value, error = anything(source)
    """

    value: T | None = None
    error: CopyError | None = None

    @property
    def ok(self) -> bool:
        """True if the copy completed."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the copied value, raising the captured error on failure.

        Raises:
            CopyError: The error that aborted the copy.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.error
