"""Configuration module using Pydantic Settings.

Provides typed configuration for the copy engine with environment variable support.

Usage:
    from deepclone.config import CopySettings

    settings = CopySettings(use_copy_hooks=True)
"""

from deepclone.config.settings import CopySettings

__all__ = [
    "CopySettings",
]
