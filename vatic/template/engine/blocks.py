"""
Matching of for-blocks in a flat token list.
"""

from typing import List, Tuple

from vatic.template.errors import UnterminatedForLoopError, UnexpectedEndForError
from vatic.template.parser.tokens import Token, ForStartToken, ForEndToken


def collect_for_body(tokens: List[Token]) -> Tuple[List[Token], int]:
    """
    Find the endfor matching a for-block.

    Args:
        tokens: Tokens immediately following the ForStartToken

    Returns:
        (body tokens, index of the matching ForEndToken in tokens)

    Raises:
        UnterminatedForLoopError: If no matching endfor exists
    """
    depth = 0

    for index, token in enumerate(tokens):
        if isinstance(token, ForEndToken):
            if depth == 0:
                return tokens[:index], index
            depth -= 1
        elif isinstance(token, ForStartToken):
            depth += 1

    raise UnterminatedForLoopError()


def check_blocks(tokens: List[Token]):
    """
    Check that every for has a matching endfor and no endfor is stray.

    Raises:
        UnterminatedForLoopError, UnexpectedEndForError
    """
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if isinstance(token, ForEndToken):
            raise UnexpectedEndForError()
        if isinstance(token, ForStartToken):
            body, end_index = collect_for_body(tokens[i + 1:])
            check_blocks(body)
            i += end_index + 2
        else:
            i += 1
