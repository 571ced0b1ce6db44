"""Shared fixtures for storage tests."""

import asyncio

import pytest


async def drain_loop(turns: int = 3) -> None:
    """Let deferred callbacks scheduled so far run."""
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def flush():
    """Coroutine function that runs pending deferred deliveries."""
    return drain_loop


@pytest.fixture
def recorder():
    """Observer that records every change event it receives."""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event):
            self.events.append(event)

    return Recorder()


@pytest.fixture
def complex_value():
    """Nested JSON-compatible value."""
    return {
        "nested": {
            "list": [1, 2, 3],
            "dict": {"a": "b"},
            "null": None,
            "bool": True,
            "float": 0.5,
        },
        "unicode": "αβγδ",
        "special": "Line\nbreak and\ttab",
    }
