# SPDX-License-Identifier: MIT


class InputError(Exception):
    """Raised when a date range or a computation input is malformed."""

    pass


class ParseError(InputError):
    """Raised when a timestamp or date string cannot be parsed."""

    pass
