"""Typed errors raised by the storybook model and codec."""

from __future__ import annotations


class StorybookError(RuntimeError):
    """Base class for every storybook failure."""


class StorybookDecodeError(StorybookError):
    """Raised when a byte stream is not a valid storybook."""


class MalformedFieldError(StorybookDecodeError):
    """A string field has no terminator or is not valid UTF-8."""


class TruncatedStreamError(StorybookDecodeError):
    """The stream ended before a declared length was satisfied."""


class DecompressionError(StorybookDecodeError):
    """A compressed payload is not a complete zlib stream."""


class FieldTooLargeError(StorybookError):
    """A value cannot be represented in the storybook wire format."""


class PageIndexError(StorybookError, IndexError):
    """A page index lies outside `0..page_count`."""


class DeadEndChoiceError(StorybookError, LookupError):
    """An absent (zero) choice was followed."""
