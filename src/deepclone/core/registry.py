"""Copier registry and opaque leaf registration.

Usage:
    from deepclone import copiers, opaque

    # Copy a type by value instead of decomposing it:
    @opaque
    @dataclass(frozen=True)
    class Money:
        amount: int
        currency: str

    # Override the routine for a whole shape:
    copiers[Kind.SET] = my_set_copier

    # Give one type a dedicated copier (wins over its kind's copier):
    copiers[Connection] = lambda conn, visited: conn.reopen()
"""

from __future__ import annotations

import datetime
import decimal
import enum
import fractions
import logging
import pathlib
import re
import threading
import uuid
from collections.abc import Callable, Iterator, MutableMapping
from typing import Any, overload

from deepclone.config import CopySettings
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
from deepclone.core.errors import UnsupportedKindError
from deepclone.core.kinds import classify
from deepclone.core.models import Copier, Kind

logger = logging.getLogger(__name__)

DEFAULT_COPIERS: dict[Kind, Copier] = {
    Kind.OPAQUE: copy_opaque,
    Kind.POINTER: copy_pointer,
    Kind.INTERFACE: copy_interface,
    Kind.ARRAY: copy_array,
    Kind.SLICE: copy_slice,
    Kind.MAP: copy_map,
    Kind.STRUCT: copy_struct,
    Kind.SET: copy_set,
}

STDLIB_LEAVES: tuple[type, ...] = (
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    decimal.Decimal,
    fractions.Fraction,
    uuid.UUID,
    pathlib.PurePath,
    enum.Enum,
    re.Pattern,
)
"""Immutable standard library types copied by value in new registries."""

type RegistryKey = Kind | type


class CopierRegistry(MutableMapping[RegistryKey, Copier]):
    """Mapping from Kind (or concrete type) to the copier used for it.

    Lookup for a value checks type keys along the value's MRO first, then the
    key for the value's Kind. Registering is a configuration step: mutate a
    registry before copies using it start, not while they run.

    Args:
        settings: Copy settings; loaded from the environment when omitted.
        defaults: If True, start with the default copier for every copyable Kind.
    """

    def __init__(self, settings: CopySettings | None = None, *, defaults: bool = True) -> None:
        self.settings = settings if settings is not None else CopySettings()
        self._by_kind: dict[Kind, Copier] = dict(DEFAULT_COPIERS) if defaults else {}
        self._by_type: dict[type, Copier] = {}
        self._opaque_types: tuple[type, ...] = ()
        if defaults and self.settings.stdlib_leaves:
            self.register_opaque(*STDLIB_LEAVES)

    def __getitem__(self, key: RegistryKey) -> Copier:
        if isinstance(key, Kind):
            return self._by_kind[key]
        return self._by_type[key]

    def __setitem__(self, key: RegistryKey, copier: Copier) -> None:
        if not callable(copier):
            raise TypeError(f"Copier for {key!r} must be callable, got {type(copier).__name__}")
        if isinstance(key, Kind):
            table: dict[Any, Copier] = self._by_kind
        elif isinstance(key, type):
            table = self._by_type
        else:
            raise TypeError(f"Registry keys must be a Kind or a type, got {key!r}")
        if key in table:
            logger.debug("Overriding copier for %s", key)
        else:
            logger.debug("Registering copier for %s", key)
        table[key] = copier

    def __delitem__(self, key: RegistryKey) -> None:
        if isinstance(key, Kind):
            del self._by_kind[key]
        else:
            del self._by_type[key]

    def __iter__(self) -> Iterator[RegistryKey]:
        yield from self._by_kind
        yield from self._by_type

    def __len__(self) -> int:
        return len(self._by_kind) + len(self._by_type)

    @overload
    def register(self, key: RegistryKey, copier: Copier) -> Copier: ...

    @overload
    def register(self, key: RegistryKey, copier: None = None) -> Callable[[Copier], Copier]: ...

    def register(
        self, key: RegistryKey, copier: Copier | None = None
    ) -> Copier | Callable[[Copier], Copier]:
        """Register a copier for a Kind or type, directly or as a decorator.

        Supports two forms:
            registry.register(Kind.SET, copy_set)

            @registry.register(Money)
            def copy_money(value, visited): ...

        Returns:
            The copier, or a decorator registering the decorated function.
        """

        def decorator(c: Copier) -> Copier:
            self[key] = c
            return c

        if copier is None:
            return decorator
        return decorator(copier)

    def register_opaque(self, *types: type) -> None:
        """Register types (and their subclasses) as leaves copied by value.

        An opaque registration wins over any structural kind the type would
        otherwise have. Subclasses of an already registered type are covered and not added again.

        Raises:
            TypeError: If an argument is not a class.
        """
        for cls in types:
            if not isinstance(cls, type):
                raise TypeError(f"Opaque leaves must be classes, got {cls!r}")
            if not self.is_opaque(cls):
                logger.debug("Registering opaque leaf %s.%s", cls.__module__, cls.__qualname__)
                self._opaque_types = (*self._opaque_types, cls)

    def is_opaque(self, cls: type) -> bool:
        """Check if instances of cls are copied as registered opaque leaves."""
        return issubclass(cls, self._opaque_types)

    @property
    def opaque_types(self) -> tuple[type, ...]:
        """Types registered as opaque leaves, in registration order."""
        return self._opaque_types

    def kind_of(self, value: Any) -> Kind:
        """Classify a value, honoring registered opaque leaf types."""
        return classify(value, self.opaque_types)

    def resolve(self, value: Any) -> Copier:
        """Find the copier for a value.

        Args:
            value: Value about to be copied.

        Returns:
            The first type-keyed copier along type(value).__mro__, else the
            copier registered for the value's Kind.

        Raises:
            UnsupportedKindError: If neither exists.
        """
        if self._by_type:
            for base in type(value).__mro__:
                copier = self._by_type.get(base)
                if copier is not None:
                    return copier
        kind = self.kind_of(value)
        copier = self._by_kind.get(kind)
        if copier is None:
            raise UnsupportedKindError(value, kind)
        return copier

    def copy(self) -> CopierRegistry:
        """Return an independent registry with the same entries and settings."""
        clone = CopierRegistry(self.settings, defaults=False)
        clone._by_kind = dict(self._by_kind)
        clone._by_type = dict(self._by_type)
        clone._opaque_types = self._opaque_types
        return clone


# Module-level registry instance, built on first use
_registry: CopierRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> CopierRegistry:
    """Access the process-wide default registry, creating it on first call.

    Settings are read from the environment at that point, not at import.

    Returns:
        The CopierRegistry used when no registry is passed explicitly.

    Raises:
        pydantic.ValidationError: If DEEPCLONE_* settings are invalid.
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = CopierRegistry()
    return _registry


@overload
def opaque(cls: type) -> type: ...


@overload
def opaque(cls: None = None, *, registry: CopierRegistry | None = None) -> Callable[[type], type]: ...


def opaque(
    cls: type | None = None, *, registry: CopierRegistry | None = None
) -> type | Callable[[type], type]:
    """Register a class as an opaque leaf, copied by value and never decomposed.

    Supports three forms:
        @opaque                         # bare decorator, default registry
        @opaque()                       # parenthesized, no args
        @opaque(registry=my_registry)   # explicit registry

    Args:
        cls: The class to register, or None if called with arguments.
        registry: Registry to register in; the default registry when omitted.

    Returns:
        Decorated class or decorator function.

    Note:
        Only mark types whose instances are never mutated in place; copies
        share the instance with the original.
    """

    def decorator(c: type) -> type:
        (registry if registry is not None else get_registry()).register_opaque(c)
        return c

    if cls is None:
        return decorator
    return decorator(cls)
