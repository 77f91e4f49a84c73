"""Domain models and errors for storybooks."""

from storybook.domain.errors import (
    DeadEndChoiceError,
    DecompressionError,
    FieldTooLargeError,
    MalformedFieldError,
    PageIndexError,
    StorybookDecodeError,
    StorybookError,
    TruncatedStreamError,
)
from storybook.domain.models import NO_CHOICE, Page, Story

__all__ = [
    "NO_CHOICE",
    "DeadEndChoiceError",
    "DecompressionError",
    "FieldTooLargeError",
    "MalformedFieldError",
    "Page",
    "PageIndexError",
    "Story",
    "StorybookDecodeError",
    "StorybookError",
    "TruncatedStreamError",
]
