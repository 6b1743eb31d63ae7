"""Error reporting for command line entry points"""

import logging
import sys
from functools import wraps
from typing import Callable

from ._wrappers.common import LibError, LibNotFoundError
from .exc import GitError

# Output piped into e.g. head closes early, that's not worth a message.
SILENCED_ERRORS = (BrokenPipeError,)
REPORTED_ERRORS = (GitError, LibError, OSError)


def debugging() -> bool:
    """Whether debug logging is on, errors keep their traceback then."""
    return logging.getLogger().level <= logging.DEBUG


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, GitError):
        return f"Error: {exc} ({exc.kind.name})"
    if isinstance(exc, LibNotFoundError):
        return f"Error: {exc}, is libgit2 installed?"
    return f"Error: {exc}"


def report_errors(command: Callable) -> Callable:
    """Let a command exit with a one-line message when libgit2 or the OS fail.

    Other exceptions are bugs and propagate unchanged.
    """

    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except SILENCED_ERRORS:
            if debugging():
                raise
        except REPORTED_ERRORS as exc:
            if debugging():
                raise
            sys.exit(describe_error(exc))

    return wrapper
