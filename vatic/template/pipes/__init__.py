"""
Pipe Module for the template engine

Provides pipes that can be applied to a tag's value:
{% value | pipe %}
"""

from vatic.template.pipes.base import BasePipe, PipeRegistry
from vatic.template.pipes.summary import SummaryPipe


def create_default_registry() -> PipeRegistry:
    """Create a registry with all default pipes."""
    registry = PipeRegistry()
    registry.register(SummaryPipe())
    return registry


# Default registry instance
default_registry = create_default_registry()


__all__ = [
    'BasePipe',
    'PipeRegistry',
    'SummaryPipe',
    'default_registry',
    'create_default_registry',
]
