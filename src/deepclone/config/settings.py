"""Copy settings using Pydantic Settings.

Provides typed configuration for the copy engine with environment variable support.

Usage:
    from deepclone.config import CopySettings

    # Load from environment variables (DEEPCLONE_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(private_fields="skip")
    registry = CopierRegistry(settings)
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for copier registries.

    Attributes:
        private_fields: "copy" to copy underscore-prefixed attributes of object
            instances, "skip" to leave them out (a PartialCopyWarning is issued).
        use_copy_hooks: Call __deepcopy__ methods of types that define one instead
            of reducing them. Values reached by such a method bypass the registry.
        stdlib_leaves: Pre-register immutable standard library types
            (datetime, Decimal, UUID, Path, Enum, ...) as opaque leaves.

    Environment Variables:
        DEEPCLONE_PRIVATE_FIELDS
        DEEPCLONE_USE_COPY_HOOKS
        DEEPCLONE_STDLIB_LEAVES
    """

    model_config = SettingsConfigDict(
        env_prefix="DEEPCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    private_fields: Literal["copy", "skip"] = "copy"
    use_copy_hooks: bool = False
    stdlib_leaves: bool = True
