#!/usr/bin/env python3
"""
Render a template file and print the result.

Usage:
    python scripts/preview_template.py prompt.txt

The context is taken from the environment:
- VATIC_RESULT, VATIC_MESSAGE, VATIC_SENDER
"""

import os
import sys
import logging
from pathlib import Path

# Add project root to path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from vatic.config import configure_logging
from vatic.template import ContextBuilder, TemplateError, TemplateRenderer

logger = logging.getLogger(__name__)


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        return 2

    configure_logging()

    template = Path(sys.argv[1]).read_text()
    context = ContextBuilder().build(
        result=os.getenv('VATIC_RESULT'),
        message=os.getenv('VATIC_MESSAGE'),
        sender=os.getenv('VATIC_SENDER'),
    )
    renderer = TemplateRenderer(context)

    validation = renderer.validate(template)
    if not validation['valid']:
        for error in validation['errors']:
            logger.error(error)
        return 1

    try:
        print(renderer.render_sync(template))
    except TemplateError as e:
        logger.error(f"Render failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
