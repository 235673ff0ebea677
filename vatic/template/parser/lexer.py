"""
Lexer for the template engine.

Splits a template into literal text and tag tokens by scanning for
{% ... %} delimiters. Text outside tags is kept exactly as written.
"""

from typing import List
import logging

from vatic.template.errors import UnclosedTagError
from vatic.template.parser.parser import parse_tag_body
from vatic.template.parser.tokens import Token, LiteralToken

logger = logging.getLogger(__name__)


OPEN_TAG = '{%'
CLOSE_TAG = '%}'


class Lexer:
    """
    Tokenizer for template text.

    The whole template is tokenized up front, so every syntax error inside
    a tag is reported before anything is evaluated.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire input text.

        Returns:
            List of tokens (empty for empty input)
        """
        self.tokens = []
        self.pos = 0

        while self.pos < len(self.text):
            tag_start = self.text.find(OPEN_TAG, self.pos)

            if tag_start == -1:
                self.tokens.append(LiteralToken(text=self.text[self.pos:]))
                break

            if tag_start > self.pos:
                self.tokens.append(LiteralToken(text=self.text[self.pos:tag_start]))

            body_start = tag_start + len(OPEN_TAG)
            tag_end = self.text.find(CLOSE_TAG, body_start)
            if tag_end == -1:
                raise UnclosedTagError(tag_start)

            body = self.text[body_start:tag_end].strip()
            self.tokens.append(parse_tag_body(body))

            self.pos = tag_end + len(CLOSE_TAG)

        logger.debug(f"Tokenized template into {len(self.tokens)} tokens")
        return self.tokens


def tokenize(text: str) -> List[Token]:
    """Tokenize a template string."""
    return Lexer(text).tokenize()
