"""
Template engine for agent prompts and output messages.

Tags are substituted with values from a RenderContext:
- Built-ins: {% date minus=1d %}, {% datetime %}, {% datetimeiso %}
- Run values: {% result %}, {% message %}, {% sender %}
- Memories: {% memory minus=2 %}
- Lookups: {% custom:name %}, {% proxy:secret_name %}
- Loops: {% for i in (1..3) %}...{% endfor %},
         {% for m in memories limit:3 %}{% m.date %}{% endfor %}
- Pipes: {% memory | summary %}

Usage:
    from vatic.template import render

    text = await render(template, context)
"""

import asyncio
from datetime import datetime
from typing import Callable, List, Optional
import logging

from vatic.template.context import ContextBuilder, RenderContext
from vatic.template.engine.blocks import check_blocks
from vatic.template.engine.evaluator import TemplateEvaluator
from vatic.template.errors import TemplateError
from vatic.template.parser import tokenize, TagToken
from vatic.template.pipes import PipeRegistry

logger = logging.getLogger(__name__)


async def render(
    template: str,
    context: RenderContext,
    pipe_registry: Optional[PipeRegistry] = None,
    clock: Optional[Callable[[], datetime]] = None
) -> str:
    """
    Render a template against a context.

    Args:
        template: Template text
        context: Values the tags resolve against
        pipe_registry: Pipes available after '|' (default registry if None)
        clock: Returns the current time for date tags

    Returns:
        The rendered text

    Raises:
        TemplateError: On any syntax or resolution error
    """
    tokens = tokenize(template)
    evaluator = TemplateEvaluator(context, pipe_registry=pipe_registry, clock=clock)
    return await evaluator.evaluate(tokens)


def render_sync(
    template: str,
    context: RenderContext,
    pipe_registry: Optional[PipeRegistry] = None,
    clock: Optional[Callable[[], datetime]] = None
) -> str:
    """Render from synchronous code (must not be called inside a running loop)."""
    return asyncio.run(render(template, context, pipe_registry=pipe_registry, clock=clock))


class TemplateRenderer:
    """
    Main entry point for rendering templates with a fixed context.

    Combines tokenizing and evaluation, and keeps statistics across calls.
    """

    def __init__(
        self,
        context: Optional[RenderContext] = None,
        pipe_registry: Optional[PipeRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the renderer.

        Args:
            context: Context for resolving tags (empty context if None)
            pipe_registry: Pipes available to templates
            clock: Returns the current time for date tags
        """
        self.context = context or RenderContext.new()
        self.pipe_registry = pipe_registry
        self.clock = clock
        self._stats = {
            'templates_rendered': 0,
            'tags_resolved': 0,
            'loops_expanded': 0,
            'templates_failed': 0
        }

    async def render(self, text: str) -> str:
        """
        Render text against the renderer's context.

        Errors are logged and re-raised; nothing is returned on failure.
        """
        evaluator = TemplateEvaluator(
            self.context,
            pipe_registry=self.pipe_registry,
            clock=self.clock
        )

        try:
            result = await evaluator.evaluate(tokenize(text))
        except TemplateError as e:
            self._stats['templates_failed'] += 1
            logger.warning(f"Template rendering failed: {e}")
            raise

        self._stats['templates_rendered'] += 1
        self._stats['tags_resolved'] += evaluator.get_resolved_count()
        self._stats['loops_expanded'] += evaluator.get_loops_count()
        return result

    def render_sync(self, text: str) -> str:
        return asyncio.run(self.render(text))

    def validate(self, text: str) -> dict:
        """
        Validate template syntax without resolving any tag.

        Returns:
            Dict with 'valid' (bool), 'errors' (list), 'warnings' (list)
        """
        errors = []

        try:
            check_blocks(tokenize(text))
        except TemplateError as e:
            errors.append(str(e))

        return {
            'valid': not errors,
            'errors': errors,
            'warnings': []
        }

    def extract_tags(self, text: str) -> List[str]:
        """
        List tag names in order of appearance, without loop control tags.

        Raises:
            TemplateSyntaxError: If the text cannot be tokenized
        """
        return [t.content.name for t in tokenize(text) if isinstance(t, TagToken)]

    def get_stats(self) -> dict:
        """Get rendering statistics."""
        return self._stats.copy()


__all__ = [
    'render',
    'render_sync',
    'TemplateRenderer',
    'RenderContext',
    'ContextBuilder',
    'PipeRegistry',
    'TemplateError',
]
