"""Fatal errors and the messages reported for them."""

from __future__ import annotations

import os
import sys


class FatalError(Exception):
    """An error that ends the program with a non-zero exit status."""

    status = 1

    def __init__(self, message: str, error: BaseException | int | None = None,
                 status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        if status is not None:
            self.status = status

    def __str__(self) -> str:
        return format_fatal(self.message, self.error)


class UsageError(FatalError):
    """The command line could not be understood."""

    status = 2


def _describe(error: BaseException | int) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    if isinstance(error, int):
        return os.strerror(error)
    return str(error)


def format_fatal(message: str, error: BaseException | int | None) -> str:
    """Build the text of a fatal message.

    A message ending in a colon is followed by a description of the
    underlying error, when there is one.
    """
    if message.endswith(":") and error is not None:
        return f"{message} {_describe(error)}"
    return message


def die(message: str) -> None:
    """Raise a FatalError, attaching the exception being handled, if any."""
    raise FatalError(message, sys.exc_info()[1])