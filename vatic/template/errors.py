"""
Errors raised by the template engine.

Every error is terminal for the current render call. Syntax errors are
raised while tokenizing or matching blocks, render errors while a specific
token is being evaluated.
"""

from typing import Optional


class TemplateError(Exception):
    """Base class for all template errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """The template text itself is malformed."""
    pass


class TemplateRenderError(TemplateError):
    """A well-formed tag could not be resolved against the context."""
    pass


# Syntax errors

class UnclosedTagError(TemplateSyntaxError):
    def __init__(self, position: int = 0):
        self.position = position
        super().__init__("unclosed tag: missing '%}'")


class EmptyTagError(TemplateSyntaxError):
    def __init__(self):
        super().__init__("empty tag")


class InvalidParamError(TemplateSyntaxError):
    """A tag parameter is missing its separator or its key."""

    def __init__(self, param: str, message: str):
        self.param = param
        super().__init__(message)


class InvalidForLoopSyntaxError(TemplateSyntaxError):
    def __init__(self, body: str, message: Optional[str] = None):
        self.body = body
        super().__init__(message or f"invalid for loop syntax: 'for {body}'")


class UnclosedRangeParenError(TemplateSyntaxError):
    def __init__(self):
        super().__init__("unclosed range parenthesis")


class InvalidRangeBoundError(TemplateSyntaxError):
    """
    A range bound is not an integer.

    bound is 'start' or 'end', or None when the range body does not
    split into exactly two pieces.
    """

    def __init__(self, raw: str, bound: Optional[str] = None):
        self.raw = raw
        self.bound = bound
        if bound is None:
            message = f"invalid range syntax: '{raw}'"
        else:
            message = f"invalid range {bound}: '{raw}'"
        super().__init__(message)


class UnterminatedForLoopError(TemplateSyntaxError):
    def __init__(self):
        super().__init__("for loop without matching endfor")


class UnexpectedEndForError(TemplateSyntaxError):
    def __init__(self):
        super().__init__("unexpected endfor outside for loop")


# Render errors

class UnknownCollectionError(TemplateRenderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown collection: '{name}'")


class UnknownTagError(TemplateRenderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown tag: '{name}'")


class UnknownLoopVariableError(TemplateRenderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown loop variable: '{name}'")


class UnknownLoopFieldError(TemplateRenderError):
    def __init__(self, var_name: str, field: str, message: str):
        self.var_name = var_name
        self.field = field
        super().__init__(message)


class UnknownDictionaryKeyError(TemplateRenderError):
    def __init__(self, key: str, section: str = 'general'):
        self.key = key
        self.section = section
        super().__init__(f"unknown dictionary key: 'custom:{key}'")


class UnknownSecretError(TemplateRenderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown secret for proxy: '{name}'")


class InvalidDurationFormatError(TemplateRenderError):
    """A duration string is not of the form <integer><d|h|m>."""

    def __init__(self, value: str, message: str):
        self.value = value
        super().__init__(message)


class EmptyDurationError(InvalidDurationFormatError):
    def __init__(self):
        super().__init__("", "empty duration")


class InvalidDurationNumberError(InvalidDurationFormatError):
    def __init__(self, value: str, number: str):
        self.number = number
        super().__init__(value, f"invalid duration number: '{number}'")


class UnknownDurationUnitError(InvalidDurationFormatError):
    def __init__(self, value: str, unit: str):
        self.unit = unit
        super().__init__(value, f"unknown duration unit: '{unit}'")


class DurationOutOfRangeError(InvalidDurationFormatError):
    def __init__(self, value: str):
        super().__init__(value, f"duration out of range: '{value}'")


class DateOutOfRangeError(TemplateRenderError):
    """Shifting the clock by a valid duration left the representable range."""

    def __init__(self, offset):
        self.offset = offset
        super().__init__(f"date out of range after applying offset {offset}")


class InvalidMemoryOffsetError(TemplateRenderError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid memory offset: '{value}'")


class MemoryOffsetOutOfRangeError(TemplateRenderError):
    def __init__(self, offset: int, available: int):
        self.offset = offset
        self.available = available
        super().__init__(f"no memory at offset {offset} (have {available} memories)")


class UnknownPipeError(TemplateRenderError):
    def __init__(self, pipe: str):
        self.pipe = pipe
        super().__init__(f"unknown pipe: '{pipe}'")


class PipeError(TemplateRenderError):
    """A registered pipe failed while transforming a value."""

    def __init__(self, pipe: str, message: str):
        self.pipe = pipe
        super().__init__(f"pipe '{pipe}' failed: {message}")


class InterpolationTypeMismatchError(TemplateRenderError):
    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(
            f"loop variable '{var_name}' is not an index, cannot interpolate"
        )
