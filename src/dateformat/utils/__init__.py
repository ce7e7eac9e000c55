"""Shared utility modules for common operations.

This package provides pure, stateless utility functions for:
- Fixed-width padding of token values
- Label templates with %x placeholder markers
- Logging setup for applications embedding the library
"""

from dateformat.utils.formatting import (
    pad,
    rpad,
    stringify,
)
from dateformat.utils.template import (
    KNOWN_PLACEHOLDERS,
    TemplateError,
    identify_placeholders,
    replace_placeholders,
    validate_template,
)

__all__ = [
    # Padding utilities
    "pad",
    "rpad",
    "stringify",
    # Label templates
    "KNOWN_PLACEHOLDERS",
    "TemplateError",
    "identify_placeholders",
    "replace_placeholders",
    "validate_template",
]
