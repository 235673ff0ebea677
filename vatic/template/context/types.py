"""
Context data for rendering templates.

All values are built by the caller before a render starts. The evaluator
only writes loop variables, and only on its own per-loop copy.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class MemoryEntry:
    """Snapshot of one past job run."""
    date: str = ""          # YYYY-MM-DD
    datetime: str = ""      # YYYY-MM-DD HH:MM
    result: str = ""


@dataclass(frozen=True)
class IndexValue:
    """Loop variable bound to an integer from a range."""
    value: int = 0


@dataclass(frozen=True)
class MemoryValue:
    """Loop variable bound to a memory entry."""
    entry: MemoryEntry = None


LoopValue = Union[IndexValue, MemoryValue]


class Dictionary:
    """
    Two-level (section, key) string lookup.

    Templates read the 'general' section through {% custom:<key> %}.
    """

    def __init__(self, entries: Optional[Dict[str, Dict[str, str]]] = None):
        self.entries: Dict[str, Dict[str, str]] = entries or {}

    def get(self, section: str, key: str) -> Optional[str]:
        return self.entries.get(section, {}).get(key)

    def set(self, section: str, key: str, value: str):
        self.entries.setdefault(section, {})[key] = value

    def __repr__(self):
        return f"<Dictionary: {len(self.entries)} sections>"


@dataclass
class Secret:
    """A named credential; templates only ever see match_url."""
    key: str = ""
    header: str = ""
    match_url: str = ""

    def __repr__(self):
        return f"Secret(key='***', header={self.header!r}, match_url={self.match_url!r})"


class Secrets:
    """Name -> Secret lookup used by {% proxy:<name> %}."""

    def __init__(self, entries: Optional[Dict[str, Secret]] = None):
        self.entries: Dict[str, Secret] = entries or {}

    def get(self, name: str) -> Optional[Secret]:
        return self.entries.get(name)

    def add(self, name: str, secret: Secret):
        self.entries[name] = secret

    def __repr__(self):
        return f"<Secrets: [{len(self.entries)} entries]>"


@dataclass
class RenderContext:
    """
    Everything a template can read.

    memories are ordered newest first.
    """
    dictionary: Dictionary = field(default_factory=Dictionary)
    secrets: Secrets = field(default_factory=Secrets)
    result: Optional[str] = None
    message: Optional[str] = None
    sender: Optional[str] = None
    memories: List[MemoryEntry] = field(default_factory=list)
    loop_vars: Dict[str, LoopValue] = field(default_factory=dict)

    @classmethod
    def new(cls, dictionary: Optional[Dictionary] = None) -> 'RenderContext':
        """Minimal context: just a dictionary, no memories or result yet."""
        return cls(dictionary=dictionary or Dictionary())

    def with_loop_frame(self) -> 'RenderContext':
        """
        Shallow copy with its own loop_vars map.

        Dictionary, secrets and memories are shared, they are never written
        during a render.
        """
        return replace(self, loop_vars=dict(self.loop_vars))
