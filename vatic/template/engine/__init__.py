"""
Template Engine Module

Provides evaluation of token lists and tag resolution.
"""

from vatic.template.engine.evaluator import TemplateEvaluator, system_clock
from vatic.template.engine.blocks import collect_for_body, check_blocks
from vatic.template.engine.functions import (
    TagKind,
    classify_tag,
    resolve_tag,
    compute_offset,
    resolve_param_value,
    parse_duration,
    shift_time,
)

__all__ = [
    'TemplateEvaluator',
    'system_clock',
    'collect_for_body',
    'check_blocks',
    'TagKind',
    'classify_tag',
    'resolve_tag',
    'compute_offset',
    'resolve_param_value',
    'parse_duration',
    'shift_time',
]
