"""
Template Parser Module

Provides tokenizing of template text and parsing of tag bodies.
"""

from vatic.template.parser.lexer import Lexer, tokenize
from vatic.template.parser.parser import (
    parse_tag_body,
    parse_tag,
    parse_for_loop,
    parse_param,
    split_pipe,
    split_tag_parts,
)
from vatic.template.parser.tokens import (
    Token,
    LiteralToken,
    TagToken,
    ForStartToken,
    ForEndToken,
    TagContent,
    ForLoop,
    RangeIterable,
    CollectionIterable,
)

__all__ = [
    'Lexer',
    'tokenize',
    'parse_tag_body',
    'parse_tag',
    'parse_for_loop',
    'parse_param',
    'split_pipe',
    'split_tag_parts',
    'Token',
    'LiteralToken',
    'TagToken',
    'ForStartToken',
    'ForEndToken',
    'TagContent',
    'ForLoop',
    'RangeIterable',
    'CollectionIterable',
]
