"""
Utilities for socialgraph.

Provides helpers for:
- Configuration
- Validation and the error taxonomy
- Exit codes
- Console encoding setup
"""

from .config import ConfigValidationError, load_config
from .console_encoding import setup_console_encoding
from .exit_codes import (EXIT_CONFIG_ERROR, EXIT_INPUT_ERROR, EXIT_IO_ERROR,
                         EXIT_RUNTIME_ERROR, EXIT_SUCCESS, log_exit)
from .validation import (GraphError, GraphInvariantError, NotFoundError,
                         ParseError, ValidationError, validate_json)

__all__ = [
    # config
    "load_config",
    "ConfigValidationError",
    # validation
    "validate_json",
    "GraphError",
    "ParseError",
    "ValidationError",
    "GraphInvariantError",
    "NotFoundError",
    # exit_codes
    "EXIT_SUCCESS",
    "EXIT_CONFIG_ERROR",
    "EXIT_INPUT_ERROR",
    "EXIT_RUNTIME_ERROR",
    "EXIT_IO_ERROR",
    "log_exit",
    # console_encoding
    "setup_console_encoding",
]
