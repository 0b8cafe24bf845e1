"""
Exit codes returned by socialgraph-ingest.

0 is success. 1 and 2 are problems the user can fix (config, input data),
3 needs a look at the log, and 5 means the filesystem refused a read or
write.
"""

from typing import Optional, Tuple

EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1  # broken config.toml or env override
EXIT_INPUT_ERROR = 2  # missing input, no valid nodes, missing CSV columns, bad JSON
EXIT_RUNTIME_ERROR = 3
EXIT_IO_ERROR = 5  # snapshot could not be written

# code -> (name, description)
EXIT_CODES = {
    EXIT_SUCCESS: ("SUCCESS", "Successful execution"),
    EXIT_CONFIG_ERROR: ("CONFIG_ERROR", "Configuration errors"),
    EXIT_INPUT_ERROR: ("INPUT_ERROR", "Input data errors"),
    EXIT_RUNTIME_ERROR: ("RUNTIME_ERROR", "Runtime errors"),
    EXIT_IO_ERROR: ("IO_ERROR", "Filesystem errors"),
}


def describe_exit_code(code: int) -> Tuple[str, str]:
    """Name and description of an exit code; unknown codes get placeholders."""
    return EXIT_CODES.get(code, (f"UNKNOWN({code})", f"Unknown exit code: {code}"))


def log_exit(logger, code: int, message: Optional[str] = None) -> None:
    """Log the exit code at INFO on success and at ERROR otherwise."""
    name, description = describe_exit_code(code)
    suffix = f" - {message}" if message else ""

    if code == EXIT_SUCCESS:
        logger.info(f"Exit: {name}{suffix}")
    else:
        logger.error(f"Exit with error: {name} ({description}){suffix}")
