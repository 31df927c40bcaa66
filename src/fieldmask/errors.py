"""Exceptions raised by fieldmask.

Errors raised inside user-registered transforms are not wrapped: they
propagate to the caller of ``Masker.mask`` exactly as raised.
"""

from __future__ import annotations


class MaskError(Exception):
    """Base class for errors raised by fieldmask itself."""


class MaskArgumentError(MaskError, ValueError):
    """A built-in transform received an argument it cannot parse."""

    def __init__(self, mask_type: str, argument: str, reason: str = "") -> None:
        self.mask_type = mask_type
        self.argument = argument
        self.annotation = f"{mask_type}{argument}"
        message = f"invalid argument {argument!r} in annotation {self.annotation!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(MaskError):
    """Configuration document is malformed."""
