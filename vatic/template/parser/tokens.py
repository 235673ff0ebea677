"""
Token types for the template engine.

A template tokenizes into a flat list of tokens. Loop bodies are not
nested in the token list; ForStartToken and ForEndToken pairs are matched
at evaluation time.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass
class TagContent:
    """
    Parsed content of a regular tag.

    Example: {% date minus=1d | summary %}
        name='date', params={'minus': '1d'}, pipe='summary'
    """
    name: str = ""
    params: Dict[str, str] = field(default_factory=dict)
    pipe: Optional[str] = None


@dataclass
class RangeIterable:
    """Inclusive integer range: (start..end)"""
    start: int = 0
    end: int = 0


@dataclass
class CollectionIterable:
    """A named collection supplied by the context, e.g. memories."""
    name: str = ""


Iterable = Union[RangeIterable, CollectionIterable]


@dataclass
class ForLoop:
    """
    Header of a for-block.

    Example: {% for i in memories limit:3 %}
        var='i', iterable=CollectionIterable('memories'), params={'limit': '3'}
    """
    var: str = ""
    iterable: Iterable = None
    params: Dict[str, str] = field(default_factory=dict)


@dataclass
class Token:
    """Base class for all tokens."""
    pass


@dataclass
class LiteralToken(Token):
    """Text outside of {% %} delimiters, reproduced verbatim."""
    text: str = ""


@dataclass
class TagToken(Token):
    content: TagContent = None


@dataclass
class ForStartToken(Token):
    loop: ForLoop = None


@dataclass
class ForEndToken(Token):
    pass
