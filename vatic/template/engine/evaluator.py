"""
Template Evaluator.

Walks a token list and produces the rendered text.
"""

from datetime import datetime
from typing import Callable, Iterator, List, Optional
import logging

from vatic.config import get_timezone
from vatic.template.context.types import (
    IndexValue,
    LoopValue,
    MemoryValue,
    RenderContext,
)
from vatic.template.engine.blocks import collect_for_body
from vatic.template.engine.functions import resolve_tag
from vatic.template.errors import UnexpectedEndForError, UnknownCollectionError
from vatic.template.parser.parser import parse_int
from vatic.template.parser.tokens import (
    Token,
    LiteralToken,
    TagToken,
    ForStartToken,
    ForEndToken,
    ForLoop,
    RangeIterable,
    CollectionIterable,
)
from vatic.template.pipes import default_registry as default_pipe_registry

logger = logging.getLogger(__name__)


def system_clock() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(get_timezone())


class TemplateEvaluator:
    """
    Evaluates a token list into final output.

    Handles:
    - Literal text
    - Tag resolution and pipes
    - For-loop expansion (ranges and collections)

    Any error aborts the whole evaluation; there is no partial output.
    """

    def __init__(
        self,
        context: RenderContext,
        pipe_registry=None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.context = context
        self.pipe_registry = pipe_registry or default_pipe_registry
        self.clock = clock or system_clock

        # Statistics
        self._resolved_count = 0
        self._loops_count = 0

    async def evaluate(self, tokens: List[Token]) -> str:
        """
        Render a token list against the evaluator's context.

        Returns:
            The rendered text
        """
        return await self._render_tokens(tokens, self.context)

    async def _render_tokens(self, tokens: List[Token], ctx: RenderContext) -> str:
        parts = []
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if isinstance(token, LiteralToken):
                parts.append(token.text)
                i += 1

            elif isinstance(token, TagToken):
                parts.append(await self._evaluate_tag(token, ctx))
                i += 1

            elif isinstance(token, ForStartToken):
                body, end_index = collect_for_body(tokens[i + 1:])
                parts.append(await self._evaluate_loop(token.loop, body, ctx))
                # Skip the body and its endfor
                i += end_index + 2

            elif isinstance(token, ForEndToken):
                raise UnexpectedEndForError()

            else:
                raise TypeError(f"Unknown token type: {type(token).__name__}")

        return ''.join(parts)

    async def _evaluate_tag(self, token: TagToken, ctx: RenderContext) -> str:
        tag = token.content
        value = resolve_tag(tag, ctx, self.clock())
        self._resolved_count += 1

        if tag.pipe is not None:
            value = await self.pipe_registry.apply(tag.pipe, value, ctx)

        return value

    async def _evaluate_loop(
        self,
        loop: ForLoop,
        body: List[Token],
        ctx: RenderContext
    ) -> str:
        """
        Render a loop body once per item.

        The context is copied once per loop; the loop variable is rebound
        on that copy for every iteration.
        """
        self._loops_count += 1
        loop_ctx = ctx.with_loop_frame()
        parts = []

        for item in self._loop_items(loop, ctx):
            loop_ctx.loop_vars[loop.var] = item
            parts.append(await self._render_tokens(body, loop_ctx))

        return ''.join(parts)

    def _loop_items(self, loop: ForLoop, ctx: RenderContext) -> Iterator[LoopValue]:
        iterable = loop.iterable

        if isinstance(iterable, RangeIterable):
            # start > end yields no iterations
            return (IndexValue(v) for v in range(iterable.start, iterable.end + 1))

        if isinstance(iterable, CollectionIterable):
            items = self._get_collection(iterable.name, ctx)

            limit = parse_int(loop.params.get('limit', ''), signed=False)
            if limit is not None:
                items = items[:limit]

            logger.debug(f"Expanding '{iterable.name}' loop over {len(items)} items")
            return iter(items)

        raise TypeError(f"Unknown iterable: {type(iterable).__name__}")

    def _get_collection(self, name: str, ctx: RenderContext) -> List[LoopValue]:
        """Resolve a named collection from the context."""
        if name == 'memories':
            return [MemoryValue(entry) for entry in ctx.memories]

        raise UnknownCollectionError(name)

    # Statistics methods

    def get_resolved_count(self) -> int:
        """Get count of resolved tags."""
        return self._resolved_count

    def get_loops_count(self) -> int:
        """Get count of loops evaluated."""
        return self._loops_count
