"""
Base classes for pipes.

Pipes post-process a tag's resolved value:
{% i.result | summary %}

Pipes are coroutines so an implementation can call out to an agent.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from vatic.template.context.types import RenderContext
from vatic.template.errors import TemplateError, UnknownPipeError, PipeError


class BasePipe(ABC):
    """
    Base class for all pipes.

    Subclasses must implement:
    - name: The pipe name used after '|' (matched exactly, case sensitive)
    - apply(): The transformation
    """

    name: str = ""

    @abstractmethod
    async def apply(self, value: str, context: RenderContext) -> str:
        """
        Transform an already resolved tag value.

        Args:
            value: The resolved tag value
            context: The context the tag was resolved against

        Returns:
            The transformed value
        """
        pass

    def __repr__(self):
        return f"<Pipe: {self.name}>"


class PipeRegistry:
    """
    Registry of available pipes.

    Allows looking up pipes by name and registering custom pipes.
    """

    def __init__(self):
        self._pipes: Dict[str, BasePipe] = {}

    def register(self, pipe: BasePipe):
        """Register a pipe, replacing any pipe with the same name."""
        self._pipes[pipe.name] = pipe

    def get(self, name: str) -> Optional[BasePipe]:
        return self._pipes.get(name)

    def has(self, name: str) -> bool:
        return name in self._pipes

    def list_pipes(self) -> List[str]:
        return list(self._pipes.keys())

    async def apply(self, name: str, value: str, context: RenderContext) -> str:
        """
        Apply a pipe by name.

        Raises:
            UnknownPipeError: If no pipe is registered under name
            PipeError: If the pipe raises anything other than a TemplateError
        """
        pipe = self.get(name)
        if pipe is None:
            raise UnknownPipeError(name)

        try:
            return await pipe.apply(value, context)
        except TemplateError:
            raise
        except Exception as e:
            raise PipeError(name, str(e)) from e
