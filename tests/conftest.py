"""
Pytest fixtures for template tests
"""

import pytest
from datetime import datetime
from dateutil import tz

from vatic.template.context import (
    Dictionary,
    MemoryEntry,
    RenderContext,
    Secret,
)


FIXED_NOW = datetime(2025, 3, 15, 14, 30, 45, tzinfo=tz.UTC)


@pytest.fixture
def fixed_now():
    """A fixed, timezone aware 'now'"""
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def empty_ctx():
    """Context with nothing in it"""
    return RenderContext.new()


@pytest.fixture
def ctx_with_dict():
    """Context with general.name = Franz"""
    dictionary = Dictionary()
    dictionary.set('general', 'name', 'Franz')
    return RenderContext.new(dictionary)


@pytest.fixture
def memories():
    """Three memories, newest first"""
    return [
        MemoryEntry(date='2025-01-03', datetime='2025-01-03 08:00', result='newest'),
        MemoryEntry(date='2025-01-02', datetime='2025-01-02 08:00', result='older'),
        MemoryEntry(date='2025-01-01', datetime='2025-01-01 08:00', result='oldest'),
    ]


@pytest.fixture
def ctx_with_memories(ctx_with_dict, memories):
    ctx_with_dict.memories = list(memories)
    return ctx_with_dict


@pytest.fixture
def ctx_with_secret(empty_ctx):
    empty_ctx.secrets.add('formshive', Secret(
        key='abc123',
        header='bearer',
        match_url='https://api.formshive.com'
    ))
    return empty_ctx
