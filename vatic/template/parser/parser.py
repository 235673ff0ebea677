"""
Parser for tag bodies.

Turns the text between {% and %} into a token:
- endfor: {% endfor %}
- For loops: {% for i in (1..3) %}, {% for m in memories limit:3 %}
- Tags: {% name key=value key:value | pipe %}

Parameter values may be double-quoted to keep whitespace; the quotes are
kept in the captured value.
"""

from typing import Dict, List, Optional, Tuple
import re

from vatic.template.errors import (
    EmptyTagError,
    InvalidParamError,
    InvalidForLoopSyntaxError,
    UnclosedRangeParenError,
    InvalidRangeBoundError,
)
from vatic.template.parser.tokens import (
    Token,
    TagToken,
    ForStartToken,
    ForEndToken,
    TagContent,
    ForLoop,
    RangeIterable,
    CollectionIterable,
)


PART_SEPARATORS = ' \t\r\n'

_SIGNED_INT = re.compile(r'[+-]?[0-9]+')
_UNSIGNED_INT = re.compile(r'\+?[0-9]+')
_SEPARATOR_RUN = re.compile(r'[ \t\r\n]+')


def parse_int(text: str, signed: bool = True) -> Optional[int]:
    """Parse an ASCII integer, returning None when text is not one."""
    pattern = _SIGNED_INT if signed else _UNSIGNED_INT
    if not pattern.fullmatch(text):
        return None
    return int(text)


def parse_tag_body(body: str) -> Token:
    """
    Parse trimmed tag body text into the matching token.

    Args:
        body: Text between the delimiters, already trimmed

    Returns:
        ForEndToken, ForStartToken or TagToken
    """
    if body == 'endfor':
        return ForEndToken()

    if body.startswith('for '):
        return ForStartToken(loop=parse_for_loop(body[4:].strip()))

    return TagToken(content=parse_tag(body))


def parse_tag(body: str) -> TagContent:
    """Parse a regular tag: name, params and an optional pipe."""
    before_pipe, pipe = split_pipe(body)
    parts = split_tag_parts(before_pipe)

    if not parts:
        raise EmptyTagError()

    return TagContent(name=parts[0], params=parse_params(parts[1:]), pipe=pipe)


def parse_for_loop(body: str) -> ForLoop:
    """
    Parse a for-loop header (text after 'for ').

    Examples:
        i in (1..3)
        i in memories limit:3
    """
    parts = _SEPARATOR_RUN.split(body.strip(PART_SEPARATORS), maxsplit=2)
    if len(parts) < 3 or parts[1] != 'in':
        raise InvalidForLoopSyntaxError(body)

    var = parts[0]
    rest = parts[2].strip(PART_SEPARATORS)

    if rest.startswith('('):
        return ForLoop(var=var, iterable=_parse_range(rest), params={})

    collection_parts = split_tag_parts(rest)
    if not collection_parts:
        raise InvalidForLoopSyntaxError(
            body, "missing collection name in for loop"
        )

    return ForLoop(
        var=var,
        iterable=CollectionIterable(name=collection_parts[0]),
        params=parse_params(collection_parts[1:])
    )


def _parse_range(text: str) -> RangeIterable:
    """Parse '(start..end)' into a RangeIterable."""
    close = text.find(')')
    if close == -1:
        raise UnclosedRangeParenError()

    range_str = text[1:close]
    pieces = range_str.split('..')
    if len(pieces) != 2:
        raise InvalidRangeBoundError(range_str)

    start = parse_int(pieces[0].strip())
    if start is None:
        raise InvalidRangeBoundError(pieces[0], 'start')

    end = parse_int(pieces[1].strip())
    if end is None:
        raise InvalidRangeBoundError(pieces[1], 'end')

    return RangeIterable(start=start, end=end)


def split_tag_parts(text: str) -> List[str]:
    """
    Split text on whitespace, keeping double-quoted runs together.

    Quote characters are kept in the returned parts.
    """
    parts = []
    current = []
    in_quotes = False

    for char in text:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char in PART_SEPARATORS and not in_quotes:
            if current:
                parts.append(''.join(current))
                current = []
        else:
            current.append(char)

    if current:
        parts.append(''.join(current))

    return parts


def split_pipe(body: str) -> Tuple[str, Optional[str]]:
    """Split on the first '|' into the tag body and an optional pipe name."""
    pipe_pos = body.find('|')
    if pipe_pos == -1:
        return body, None

    before = body[:pipe_pos].strip()
    after = body[pipe_pos + 1:].strip()
    return before, (after or None)


def parse_param(param: str) -> Tuple[str, str]:
    """
    Parse key=value or key:value.

    '=' wins over ':' wherever they appear, so 'key=val:ue' gives
    ('key', 'val:ue').
    """
    sep_pos = param.find('=')
    if sep_pos == -1:
        sep_pos = param.find(':')

    if sep_pos == -1:
        raise InvalidParamError(
            param, f"invalid parameter (missing '=' or ':'): '{param}'"
        )

    if sep_pos == 0:
        raise InvalidParamError(param, f"empty parameter key in '{param}'")

    return param[:sep_pos], param[sep_pos + 1:]


def parse_params(parts: List[str]) -> Dict[str, str]:
    """Parse parameter parts; a repeated key keeps its last value."""
    params = {}
    for part in parts:
        key, value = parse_param(part)
        params[key] = value
    return params
