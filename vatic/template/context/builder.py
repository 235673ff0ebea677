"""
Context Builder for the template engine.

Builds a RenderContext from the plain data collaborators hand over:
configuration dicts, store rows and the inbound message.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union
import logging

from vatic.template.context.types import (
    Dictionary,
    MemoryEntry,
    RenderContext,
    Secret,
    Secrets,
)

logger = logging.getLogger(__name__)


class ContextBuilder:
    """
    Builds render contexts from plain Python data.

    Example:
        ctx = ContextBuilder().build(
            dictionary={'general': {'name': 'Franz'}},
            secrets={'formshive': {'key': '...', 'match_url': 'https://...'}},
            memories=[{'date': '2025-01-02', 'datetime': '...', 'result': '...'}],
            result='sunny',
        )
    """

    def build(
        self,
        dictionary: Optional[Union[Dictionary, Mapping[str, Mapping[str, Any]]]] = None,
        secrets: Optional[Union[Secrets, Mapping[str, Any]]] = None,
        memories: Optional[Iterable[Any]] = None,
        result: Optional[str] = None,
        message: Optional[str] = None,
        sender: Optional[str] = None
    ) -> RenderContext:
        """
        Build a complete context for rendering.

        Args:
            dictionary: Dictionary instance or {section: {key: value}}
            secrets: Secrets instance or {name: Secret | dict}
            memories: MemoryEntry objects or dicts, newest first
            result: Current job result
            message: Inbound message text
            sender: Inbound message sender

        Returns:
            RenderContext ready for rendering
        """
        context = RenderContext(
            dictionary=self._build_dictionary(dictionary),
            secrets=self._build_secrets(secrets),
            result=result,
            message=message,
            sender=sender,
            memories=[self._build_memory(m) for m in (memories or [])],
        )

        logger.debug(
            f"Built render context: {len(context.memories)} memories, "
            f"{len(context.secrets.entries)} secrets"
        )
        return context

    def _build_dictionary(self, dictionary) -> Dictionary:
        if dictionary is None:
            return Dictionary()
        if isinstance(dictionary, Dictionary):
            return dictionary

        built = Dictionary()
        for section, values in dictionary.items():
            for key, value in values.items():
                built.set(section, key, str(value))
        return built

    def _build_secrets(self, secrets) -> Secrets:
        if secrets is None:
            return Secrets()
        if isinstance(secrets, Secrets):
            return secrets

        built = Secrets()
        for name, data in secrets.items():
            if isinstance(data, Secret):
                built.add(name, data)
                continue

            built.add(name, Secret(
                key=data.get('key', ''),
                header=data.get('header', ''),
                match_url=data.get('match_url') or data.get('matchUrl') or ''
            ))
        return built

    def _build_memory(self, memory) -> MemoryEntry:
        if isinstance(memory, MemoryEntry):
            return memory

        return MemoryEntry(
            date=str(memory.get('date', '')),
            datetime=str(memory.get('datetime', '')),
            result=str(memory.get('result', ''))
        )
