"""Cycle tracker for a single deep copy.

Maps the identity of every referenceable source object already reached to the
copy made for it. Copiers register the destination before filling it, so a
self reference met while filling resolves to the copy under construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deepclone.core.registry import CopierRegistry

MISSING: Any = object()
"""Sentinel returned by Visited.get() for identities not yet copied."""


class Visited:
    """Identity-keyed map from source objects to their copies.

    Owned by one top-level copy and discarded when it returns. Must not be
    shared between concurrent copies.

    Args:
        registry: Registry resolving copiers for this copy.
    """

    __slots__ = ("registry", "_memo", "_originals")

    def __init__(self, registry: CopierRegistry) -> None:
        self.registry = registry
        self._memo: dict[int, Any] = {}
        self._originals: list[Any] = []

    def get(self, source: Any, default: Any = MISSING) -> Any:
        """Return the copy registered for source, or default."""
        return self._memo.get(id(source), default)

    def register(self, source: Any, copy: Any) -> None:
        """Record copy as the one copy of source for the rest of this run.

        The source is kept alive until the run ends so its id() cannot be
        reused by another object mid-copy.
        """
        self._memo[id(source)] = copy
        self._originals.append(source)

    @property
    def memo(self) -> dict[int, Any]:
        """Underlying id-to-copy dict, in the shape __deepcopy__ hooks expect."""
        return self._memo

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._memo

    def __len__(self) -> int:
        return len(self._originals)
