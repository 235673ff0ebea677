"""
Summary pipe.

Prefixes the value with a fixed marker. This stands in for a pipe that
asks an agent for a real summary; replace it by registering another pipe
named 'summary'.
"""

from typing import Optional

from vatic.config import Config
from vatic.template.context.types import RenderContext
from vatic.template.pipes.base import BasePipe


class SummaryPipe(BasePipe):
    """
    Mark a value as a summary.

    Usage: {% memory | summary %}
    """
    name = "summary"

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = Config.SUMMARY_PREFIX if prefix is None else prefix

    async def apply(self, value: str, context: RenderContext) -> str:
        return f"{self.prefix}{value}"
