"""Choose-your-own-adventure storybooks and their binary file format."""

from storybook.core.storybook_codec import decode_story, encode_story, read_story, write_story
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
    "decode_story",
    "encode_story",
    "read_story",
    "write_story",
]
