"""Dispatcher: route a value to the copier registered for its shape."""

from __future__ import annotations

from typing import Any

from deepclone.core.visited import Visited


def copy_value(value: Any, visited: Visited) -> Any:
    """Copy one value inside a running deep copy.

    Copiers call this for every sub-value they reach. None copies to itself
    and never touches the registry or the visited tracker.

    Args:
        value: Value to copy.
        visited: Tracker of the running copy; also supplies the registry.

    Returns:
        The copy produced by the resolved copier, unchanged.

    Raises:
        UnsupportedKindError: If no copier is registered for the value.
    """
    if value is None:
        return None
    copier = visited.registry.resolve(value)
    return copier(value, visited)
