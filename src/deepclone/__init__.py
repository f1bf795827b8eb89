"""deepclone: deep copy of arbitrary Python values.

Usage:
    from deepclone import anything, must_anything

    @dataclass
    class Node:
        value: int
        next: "Node | None" = None

    node = Node(1)
    node.next = node                  # cycles are fine

    clone = must_anything(node)
    assert clone is not node
    assert clone.next is clone

    clone, error = anything(lambda: 0)  # functions are rejected
    assert clone is None and error is not None
"""

__version__ = "0.1.0"

from deepclone.api import anything, must_anything
from deepclone.config import CopySettings
from deepclone.core import (
    Copier,
    CopierRegistry,
    Copy,
    CopyError,
    CopyResult,
    Kind,
    PartialCopyWarning,
    TypeMismatchError,
    UnsupportedKindError,
    Visited,
    get_registry,
    opaque,
)


def __getattr__(name: str) -> CopierRegistry:
    # copiers: the process-wide default registry, built on first access
    if name == "copiers":
        return get_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Entry points
    "anything",
    "must_anything",
    # Registry
    "copiers",
    "get_registry",
    "opaque",
    "CopierRegistry",
    "Copier",
    "Kind",
    "Visited",
    # Results and errors
    "Copy",
    "CopyResult",
    "CopyError",
    "UnsupportedKindError",
    "TypeMismatchError",
    "PartialCopyWarning",
    # Config
    "CopySettings",
]
