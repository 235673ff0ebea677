"""
Context Module for the template engine

Provides the render context types and a builder for plain data.
"""

from vatic.template.context.types import (
    MemoryEntry,
    IndexValue,
    MemoryValue,
    LoopValue,
    Dictionary,
    Secret,
    Secrets,
    RenderContext,
)
from vatic.template.context.builder import ContextBuilder

__all__ = [
    'MemoryEntry',
    'IndexValue',
    'MemoryValue',
    'LoopValue',
    'Dictionary',
    'Secret',
    'Secrets',
    'RenderContext',
    'ContextBuilder',
]
