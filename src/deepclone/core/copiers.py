"""Shape copiers: one copy routine per Kind.

Every copier takes (value, visited) and returns the copy. Each one checks the
value's kind first and raises TypeMismatchError for any other shape, so a
copier can never produce a partial or coerced result.

Referenceable shapes (pointer, interface, slice, map, set) follow the same
discipline: return the existing copy on a repeat visit, otherwise allocate an
empty destination, register it, and only then copy the contents into it.
"""

from __future__ import annotations

import os
import warnings
from collections import OrderedDict, defaultdict, deque
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from deepclone.core.dispatch import copy_value
from deepclone.core.errors import (
    CopyError,
    PartialCopyWarning,
    TypeMismatchError,
    UnsupportedKindError,
)
from deepclone.core.kinds import slot_names
from deepclone.core.models import Kind
from deepclone.core.visited import MISSING, Visited

if TYPE_CHECKING:
    from deepclone.core.registry import CopierRegistry

_PACKAGE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "")


def _default_registry() -> CopierRegistry:
    # Late import to avoid circular dependency
    from deepclone.core.registry import get_registry

    return get_registry()


def _expect(value: Any, visited: Visited | None, kind: Kind) -> tuple[Visited, Any]:
    """Check that value has the given kind and look up any copy already made of it.

    Returns:
        The tracker to copy with, and the copy registered for value (MISSING if
        there is none or the kind is not referenceable).

    Raises:
        TypeMismatchError: If the value is of another kind.
    """
    registry = visited.registry if visited is not None else _default_registry()
    actual = registry.kind_of(value)
    if actual is not kind:
        raise TypeMismatchError(kind, actual, value)
    if visited is None:
        visited = Visited(registry)
    found = visited.get(value) if kind.referenceable else MISSING
    return visited, found


def _construct(value: Any, kind: Kind, factory: Any, *args: Any) -> Any:
    """Call factory(*args) to build the copy of value.

    Raises:
        UnsupportedKindError: If the type cannot be constructed this way.
    """
    try:
        return factory(*args)
    except CopyError:
        raise
    except TypeError as e:
        raise UnsupportedKindError(value, kind, str(e)) from e


def _allocate(value: Any, kind: Kind) -> Any:
    """Create an empty container of the same type as value, without calling __init__."""
    cls = type(value)
    target = _construct(value, kind, cls.__new__, cls)
    if isinstance(value, deque):
        deque.__init__(target, (), value.maxlen)
    elif isinstance(value, OrderedDict):
        OrderedDict.__init__(target)
    elif isinstance(value, defaultdict):
        target.default_factory = value.default_factory
    return target


def _fields(source: Any) -> Iterator[tuple[str, Any]]:
    """Yield (name, value) for every set attribute: slots first, then __dict__."""
    for name in slot_names(type(source)):
        try:
            value = object.__getattribute__(source, name)
        except AttributeError:
            continue  # unset slot stays unset
        yield name, value
    instance_dict = getattr(source, "__dict__", None)
    if instance_dict:
        yield from list(instance_dict.items())


def _copy_fields(source: Any, target: Any, visited: Visited) -> None:
    """Deep copy every attribute of source onto target in declaration order."""
    skip_private = visited.registry.settings.private_fields == "skip"
    skipped: list[str] = []
    for name, value in _fields(source):
        if skip_private and name.startswith("_"):
            skipped.append(name)
            continue
        object.__setattr__(target, name, copy_value(value, visited))
    if skipped:
        # Attributed to the first frame outside this package
        warnings.warn(
            f"Copy of {type(source).__name__} omits private fields {skipped}",
            PartialCopyWarning,
            skip_file_prefixes=(_PACKAGE_DIR,),
        )


def copy_opaque(value: Any, visited: Visited | None) -> Any:
    """Return an immutable leaf as is."""
    _expect(value, visited, Kind.OPAQUE)
    return value


def copy_pointer(value: Any, visited: Visited | None) -> Any:
    """Copy an object instance: new target of the same class, then its fields.

    The target is created with cls.__new__ so __init__ side effects do not run,
    and fields are assigned with object.__setattr__ so frozen dataclasses and
    slotted classes copy the same way as plain ones.

    Args:
        value: Instance with __dict__ and/or __slots__ storage.
        visited: Tracker of the running copy, or None.

    Returns:
        The new instance, or the copy already made for value in this run.

    Raises:
        TypeMismatchError: If value is not a POINTER kind value.
    """
    visited, found = _expect(value, visited, Kind.POINTER)
    if found is not MISSING:
        return found
    cls = type(value)
    target = cls.__new__(cls)
    visited.register(value, target)
    _copy_fields(value, target, visited)
    return target


def copy_interface(value: Any, visited: Visited | None) -> Any:
    """Copy a value through its pickling protocol, or its __deepcopy__ if enabled.

    The value is unwrapped with __reduce_ex__ into a reconstructor, its
    arguments and its state; arguments and state are deep copied through the
    registry and the reconstructor re-wraps them into a value of the same
    concrete type.

    With use_copy_hooks on, a __deepcopy__ method is called instead. Whatever
    it reaches is copied by that method, not by the registry.

    Args:
        value: Value whose type customizes copying or has no attribute storage.
        visited: Tracker of the running copy, or None.

    Returns:
        The reconstructed value, or the copy already made for value in this run.

    Raises:
        TypeMismatchError: If value is not an INTERFACE kind value.
        UnsupportedKindError: If the type refuses reduction or reconstruction.
    """
    visited, found = _expect(value, visited, Kind.INTERFACE)
    if found is not MISSING:
        return found

    hook = getattr(value, "__deepcopy__", None)
    if hook is not None and visited.registry.settings.use_copy_hooks:
        target = _construct(value, Kind.INTERFACE, hook, visited.memo)
        visited.register(value, target)
        return target

    try:
        reduced = value.__reduce_ex__(4)
    except TypeError as e:
        raise UnsupportedKindError(value, Kind.INTERFACE, str(e)) from e
    if isinstance(reduced, str):
        # Module-level singleton, pickled by name
        return value
    return _reconstruct(value, visited, *reduced)


def _reconstruct(
    source: Any,
    visited: Visited,
    func: Any,
    args: tuple[Any, ...],
    state: Any = None,
    listitems: Iterator[Any] | None = None,
    dictitems: Iterator[tuple[Any, Any]] | None = None,
    state_setter: Any = None,
) -> Any:
    target = _construct(source, Kind.INTERFACE, func, *copy_value(args, visited))
    visited.register(source, target)

    if state is not None:
        state = copy_value(state, visited)
        if state_setter is not None:
            state_setter(target, state)
        elif hasattr(target, "__setstate__"):
            target.__setstate__(state)
        else:
            slot_state = None
            if isinstance(state, tuple) and len(state) == 2:
                state, slot_state = state
            if state:
                target.__dict__.update(state)
            if slot_state:
                for name, item in slot_state.items():
                    setattr(target, name, item)

    if listitems is not None:
        for item in listitems:
            target.append(copy_value(item, visited))
    if dictitems is not None:
        for key, item in dictitems:
            target[copy_value(key, visited)] = copy_value(item, visited)
    return target


def copy_array(value: Any, visited: Visited | None) -> Any:
    """Copy a tuple element by element, in order. Tuples are never registered."""
    visited, _ = _expect(value, visited, Kind.ARRAY)
    items = [copy_value(item, visited) for item in value]
    cls = type(value)
    return tuple(items) if cls is tuple else _construct(value, Kind.ARRAY, cls, items)


def copy_slice(value: Any, visited: Visited | None) -> Any:
    """Copy a list, bytearray or deque.

    An empty input yields a new empty container; nil (None) never reaches
    this copier. Extra attributes on subclasses are copied as fields.

    Raises:
        TypeMismatchError: If value is not a SLICE kind value.
        UnsupportedKindError: If a subclass cannot be created empty.
    """
    visited, found = _expect(value, visited, Kind.SLICE)
    if found is not MISSING:
        return found
    target = _allocate(value, Kind.SLICE)
    visited.register(value, target)
    append = next(base.append for base in (list, deque, bytearray) if isinstance(value, base))
    for item in value:
        append(target, copy_value(item, visited))
    _copy_fields(value, target, visited)
    return target


def copy_map(value: Any, visited: Visited | None) -> Any:
    """Copy a dict (or subclass), deep copying both keys and values.

    defaultdict keeps its default_factory by reference.

    Raises:
        TypeMismatchError: If value is not a MAP kind value.
        UnsupportedKindError: If a subclass cannot be created empty.
    """
    visited, found = _expect(value, visited, Kind.MAP)
    if found is not MISSING:
        return found
    target = _allocate(value, Kind.MAP)
    visited.register(value, target)
    for key, item in value.items():
        target[copy_value(key, visited)] = copy_value(item, visited)
    _copy_fields(value, target, visited)
    return target


def copy_struct(value: Any, visited: Visited | None) -> Any:
    """Copy a named tuple field by field in declaration order."""
    visited, _ = _expect(value, visited, Kind.STRUCT)
    cls = type(value)
    return cls._make([copy_value(getattr(value, name), visited) for name in cls._fields])


def copy_set(value: Any, visited: Visited | None) -> Any:
    """Copy a set or frozenset.

    Mutable sets are registered before their elements are copied; frozensets
    are built from already copied elements and never registered.
    """
    visited, found = _expect(value, visited, Kind.SET)
    if found is not MISSING:
        return found
    if isinstance(value, frozenset):
        items = [copy_value(item, visited) for item in value]
        cls = type(value)
        return frozenset(items) if cls is frozenset else _construct(value, Kind.SET, cls, items)

    target = _allocate(value, Kind.SET)
    visited.register(value, target)
    for item in value:
        target.add(copy_value(item, visited))
    _copy_fields(value, target, visited)
    return target
