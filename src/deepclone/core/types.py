"""Core type definitions for deepclone."""

type Copy[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
state with its source. Mutating it never affects the original, and the other
way round. Opaque leaves (numbers, strings, registered immutable types) are
the only objects the two may share.
"""
