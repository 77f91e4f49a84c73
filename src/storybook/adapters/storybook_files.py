"""Filesystem persistence for `.storybook` files."""

from __future__ import annotations

import logging
from pathlib import Path

from storybook.core.storybook_codec import encode_story, read_story
from storybook.domain.models import Story

logger = logging.getLogger(__name__)

STORYBOOK_SUFFIX = ".storybook"


def load_story(path: Path) -> Story:
    """Read and decode one storybook file."""
    with path.open("rb") as source:
        story = read_story(source)
    logger.info("storybook.load path=%s pages=%s", path, story.page_count)
    return story


def save_story(path: Path, story: Story) -> int:
    """Encode `story` and write it to `path`; returns the byte count.

    The file is left untouched when encoding fails.
    """
    payload = encode_story(story)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as sink:
        sink.write(payload)
    logger.info("storybook.save path=%s pages=%s bytes=%s", path, story.page_count, len(payload))
    return len(payload)
