"""
vatic - prompt and message templating for scheduled agent jobs.
"""

from vatic.template import render, render_sync, TemplateRenderer

__version__ = '0.1.0'

__all__ = [
    'render',
    'render_sync',
    'TemplateRenderer',
]
