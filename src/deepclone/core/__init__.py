"""Core copy engine: shape kinds, dispatcher, cycle tracker, copiers, and registry.

Architecture Note:
    models, kinds, errors and visited hold no process state. registry owns the
    single piece of process-wide state, the default CopierRegistry. It is built on
    first use and only read while copies run.
"""

from deepclone.core.copiers import (
    copy_array,
    copy_interface,
    copy_map,
    copy_opaque,
    copy_pointer,
    copy_set,
    copy_slice,
    copy_struct,
)
from deepclone.core.dispatch import copy_value
from deepclone.core.errors import (
    CopyError,
    PartialCopyWarning,
    TypeMismatchError,
    UnsupportedKindError,
)
from deepclone.core.kinds import classify
from deepclone.core.models import Copier, CopyResult, Kind
from deepclone.core.registry import (
    DEFAULT_COPIERS,
    STDLIB_LEAVES,
    CopierRegistry,
    get_registry,
    opaque,
)
from deepclone.core.types import Copy
from deepclone.core.visited import Visited

__all__ = [
    # Types
    "Copy",
    # Models
    "Kind",
    "Copier",
    "CopyResult",
    "classify",
    # Errors
    "CopyError",
    "UnsupportedKindError",
    "TypeMismatchError",
    "PartialCopyWarning",
    # Engine
    "Visited",
    "copy_value",
    # Copiers
    "copy_opaque",
    "copy_pointer",
    "copy_interface",
    "copy_array",
    "copy_slice",
    "copy_map",
    "copy_struct",
    "copy_set",
    # Registry
    "CopierRegistry",
    "DEFAULT_COPIERS",
    "STDLIB_LEAVES",
    "get_registry",
    "opaque",
]
