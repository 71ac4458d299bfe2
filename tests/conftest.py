"""Shared test fixtures for the Better Thinking test suite."""

import pytest

from better_thinking.processor import ThinkingProcessor
from better_thinking.store import ThoughtStore


@pytest.fixture()
def store():
    """A fresh, empty thought store."""
    return ThoughtStore()


@pytest.fixture()
def processor(store):
    """A processor bound to the fresh store, rendering without colour."""
    return ThinkingProcessor(store=store, color=False)


@pytest.fixture()
def make_args():
    """Build valid tool arguments, overriding or adding fields as needed."""

    def _make(**overrides):
        args = {
            "thought": "Dallas is in Texas, so the capital is Austin.",
            "thoughtNumber": 1,
            "totalThoughts": 3,
            "nextThoughtNeeded": True,
        }
        args.update(overrides)
        return args

    return _make
