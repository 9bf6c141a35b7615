#!/usr/bin/env python3
# jtoa/errors.py
"""
Error kinds raised by jtoa components.
Only the command-line entry point turns these into messages and exit codes.
"""

__all__ = [
    "JtoaError",
    "InvalidArguments",
    "AllocationFailure",
    "FileOpenFailure",
    "DecodeFailure",
]


class JtoaError(Exception):
    """Base class for all fatal jtoa errors."""


class InvalidArguments(JtoaError):
    """Malformed flags, missing operands, bad palette or bad dimensions."""


class AllocationFailure(JtoaError):
    """The destination grid could not be allocated."""


class FileOpenFailure(JtoaError):
    """A named input could not be opened. Aborts the remaining batch."""


class DecodeFailure(JtoaError):
    """The image decoder rejected the input."""
