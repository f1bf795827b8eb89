"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from deepclone import CopierRegistry, CopySettings, Visited


@pytest.fixture
def registry():
    """Fresh CopierRegistry with default settings, isolated from the environment."""
    return CopierRegistry(CopySettings(_env_file=None))


@pytest.fixture
def visited(registry):
    """Fresh cycle tracker over the test registry."""
    return Visited(registry)


@dataclass
class FixtureNode:
    value: int
    next: "FixtureNode | None" = None


@pytest.fixture
def node_cls():
    return FixtureNode
