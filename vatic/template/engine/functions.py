"""
Tag resolution.

Maps a parsed tag plus the render context to a string. Tag names are
classified in a fixed order:

1. dotted names (i.date)          -> field of a memory loop variable
2. proxy:<name>                   -> secret match URL
3. custom:<key>                   -> dictionary 'general' section
4. date, datetime, datetimeiso    -> clock, with minus=/plus= offsets
5. result, message, sender        -> context values ('' when unset)
6. memory                         -> stored result, minus=1 is the newest
7. anything else                  -> bare loop variable, else unknown tag
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict, Tuple

from dateutil import tz

from vatic.template.context.types import (
    IndexValue,
    MemoryValue,
    RenderContext,
)
from vatic.template.errors import (
    UnknownLoopVariableError,
    UnknownLoopFieldError,
    UnknownSecretError,
    UnknownDictionaryKeyError,
    UnknownTagError,
    EmptyDurationError,
    InvalidDurationNumberError,
    DurationOutOfRangeError,
    DateOutOfRangeError,
    UnknownDurationUnitError,
    InvalidMemoryOffsetError,
    MemoryOffsetOutOfRangeError,
    InterpolationTypeMismatchError,
)
from vatic.template.parser.parser import parse_int
from vatic.template.parser.tokens import TagContent


PROXY_PREFIX = 'proxy:'
CUSTOM_PREFIX = 'custom:'
CUSTOM_SECTION = 'general'

DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%d %H:%M'

DURATION_UNITS = {
    'd': 'days',
    'h': 'hours',
    'm': 'minutes',
}

MEMORY_FIELDS = ('date', 'datetime', 'result')


class TagKind(Enum):
    """What a tag name refers to."""
    LOOP_FIELD = 'loop_field'
    PROXY = 'proxy'
    CUSTOM = 'custom'
    DATE = 'date'
    DATETIME = 'datetime'
    DATETIME_ISO = 'datetimeiso'
    RESULT = 'result'
    MESSAGE = 'message'
    SENDER = 'sender'
    MEMORY = 'memory'
    LOOP_VAR = 'loop_var'


BUILTIN_TAGS = {
    'date': TagKind.DATE,
    'datetime': TagKind.DATETIME,
    'datetimeiso': TagKind.DATETIME_ISO,
    'result': TagKind.RESULT,
    'message': TagKind.MESSAGE,
    'sender': TagKind.SENDER,
    'memory': TagKind.MEMORY,
}


def classify_tag(name: str) -> Tuple[TagKind, str]:
    """
    Classify a tag name.

    Returns:
        (kind, argument) where argument is the name with any namespace
        prefix removed
    """
    if '.' in name:
        return TagKind.LOOP_FIELD, name

    if name.startswith(PROXY_PREFIX):
        return TagKind.PROXY, name[len(PROXY_PREFIX):]

    if name.startswith(CUSTOM_PREFIX):
        return TagKind.CUSTOM, name[len(CUSTOM_PREFIX):]

    return BUILTIN_TAGS.get(name, TagKind.LOOP_VAR), name


def resolve_tag(tag: TagContent, ctx: RenderContext, now: datetime) -> str:
    """
    Resolve a tag to its string value.

    Args:
        tag: Parsed tag
        ctx: Render context
        now: Current time for date tags (timezone aware)
    """
    kind, arg = classify_tag(tag.name)
    return _RESOLVERS[kind](tag, arg, ctx, now)


def _resolve_loop_field(tag, name, ctx, now) -> str:
    var_name, field = name.split('.', 1)

    loop_val = ctx.loop_vars.get(var_name)
    if loop_val is None:
        raise UnknownLoopVariableError(var_name)

    if isinstance(loop_val, IndexValue):
        raise UnknownLoopFieldError(
            var_name, field, f"index variable '{var_name}' has no field '{field}'"
        )

    if field not in MEMORY_FIELDS:
        raise UnknownLoopFieldError(var_name, field, f"memory has no field '{field}'")

    return getattr(loop_val.entry, field)


def _resolve_proxy(tag, secret_name, ctx, now) -> str:
    secret = ctx.secrets.get(secret_name)
    if secret is None:
        raise UnknownSecretError(secret_name)
    return secret.match_url


def _resolve_custom(tag, key, ctx, now) -> str:
    value = ctx.dictionary.get(CUSTOM_SECTION, key)
    if value is None:
        raise UnknownDictionaryKeyError(key, CUSTOM_SECTION)
    return value


def _resolve_date(tag, name, ctx, now) -> str:
    return shift_time(now, compute_offset(tag.params, ctx)).strftime(DATE_FORMAT)


def _resolve_datetime(tag, name, ctx, now) -> str:
    return shift_time(now, compute_offset(tag.params, ctx)).strftime(DATETIME_FORMAT)


def _resolve_datetime_iso(tag, name, ctx, now) -> str:
    # Params are ignored
    return now.isoformat()


def _resolve_result(tag, name, ctx, now) -> str:
    return ctx.result or ''


def _resolve_message(tag, name, ctx, now) -> str:
    return ctx.message or ''


def _resolve_sender(tag, name, ctx, now) -> str:
    return ctx.sender or ''


def _resolve_memory(tag, name, ctx, now) -> str:
    offset = 0

    minus = tag.params.get('minus')
    if minus is not None:
        value = parse_int(minus, signed=False)
        if value is None:
            raise InvalidMemoryOffsetError(minus)
        # minus=0 and minus=1 both mean the newest entry
        offset = max(value - 1, 0)

    if offset >= len(ctx.memories):
        raise MemoryOffsetOutOfRangeError(offset, len(ctx.memories))

    return ctx.memories[offset].result


def _resolve_loop_var(tag, name, ctx, now) -> str:
    loop_val = ctx.loop_vars.get(name)

    if isinstance(loop_val, IndexValue):
        return str(loop_val.value)

    if isinstance(loop_val, MemoryValue):
        return loop_val.entry.result

    raise UnknownTagError(name)


_RESOLVERS: Dict[TagKind, Callable[..., str]] = {
    TagKind.LOOP_FIELD: _resolve_loop_field,
    TagKind.PROXY: _resolve_proxy,
    TagKind.CUSTOM: _resolve_custom,
    TagKind.DATE: _resolve_date,
    TagKind.DATETIME: _resolve_datetime,
    TagKind.DATETIME_ISO: _resolve_datetime_iso,
    TagKind.RESULT: _resolve_result,
    TagKind.MESSAGE: _resolve_message,
    TagKind.SENDER: _resolve_sender,
    TagKind.MEMORY: _resolve_memory,
    TagKind.LOOP_VAR: _resolve_loop_var,
}


def shift_time(now: datetime, offset: timedelta) -> datetime:
    """
    Shift now by an absolute amount of time, keeping its timezone.

    The addition happens in UTC so an hour is always an hour, also across
    DST changes.

    Raises:
        DateOutOfRangeError: If the result is not a representable datetime
    """
    try:
        if now.tzinfo is None:
            return now + offset
        return (now.astimezone(tz.UTC) + offset).astimezone(now.tzinfo)
    except OverflowError:
        raise DateOutOfRangeError(offset) from None


def compute_offset(params: Dict[str, str], ctx: RenderContext) -> timedelta:
    """Compute the time offset from the minus= and plus= params."""
    minus = timedelta(0)
    plus = timedelta(0)

    if 'minus' in params:
        minus = parse_duration(resolve_param_value(params['minus'], ctx))

    if 'plus' in params:
        plus = parse_duration(resolve_param_value(params['plus'], ctx))

    try:
        return plus - minus
    except OverflowError:
        raise DateOutOfRangeError(f"+{plus} -{minus}") from None


def resolve_param_value(value: str, ctx: RenderContext) -> str:
    """
    Interpolate a loop index into a param value.

    i"d" with i bound to 2 becomes 2d. When the variable before the quote
    is not bound at all, the value is returned unchanged.
    """
    quote_pos = value.find('"')
    if quote_pos == -1:
        return value

    var_name = value[:quote_pos]
    suffix = value[quote_pos + 1:].strip('"')

    loop_val = ctx.loop_vars.get(var_name)
    if loop_val is None:
        return value

    if not isinstance(loop_val, IndexValue):
        raise InterpolationTypeMismatchError(var_name)

    return f"{loop_val.value}{suffix}"


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration like 1d, 2h, 30m or -1d.

    Raises:
        EmptyDurationError, InvalidDurationNumberError, UnknownDurationUnitError
    """
    if not text:
        raise EmptyDurationError()

    number, unit = text[:-1], text[-1]

    amount = parse_int(number)
    if amount is None:
        raise InvalidDurationNumberError(text, number)

    if unit not in DURATION_UNITS:
        raise UnknownDurationUnitError(text, unit)

    try:
        return timedelta(**{DURATION_UNITS[unit]: amount})
    except OverflowError:
        raise DurationOutOfRangeError(text) from None
