"""Authoring helpers used by story editors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from storybook.domain.models import NO_CHOICE, OUT_OF_BOUNDS_MESSAGE, Page, Story

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Unknown"
DEFAULT_PAGE_TEXT = "Page text"
_CHOICE_PATTERN = re.compile(r"[+-]?[0-9]+")


class PageEditEvent(Protocol):
    """Fields an editor may change on one page; None leaves a field alone."""

    text: str | None
    image: bytes | None
    clear_image: bool
    choice1: int | None
    choice2: int | None


@dataclass(frozen=True)
class ChoiceInput:
    """Result of parsing one choice field typed by an author."""

    value: int
    error: str | None = None


def new_story(title: str | None, author: str | None) -> Story:
    """Create an empty story, falling back to placeholder title and author."""
    resolved_title = title if title else DEFAULT_TITLE
    resolved_author = author if author else DEFAULT_AUTHOR
    return Story(title=resolved_title, author=resolved_author)


def blank_page() -> Page:
    return Page(text=DEFAULT_PAGE_TEXT)


def parse_choice_input(raw: str, page_count: int) -> ChoiceInput:
    """Parse editor input for a choice field.

    Unparseable or negative input counts as no choice. A page number past
    the end of the story is reported and stored as no choice.
    """
    match = _CHOICE_PATTERN.fullmatch(raw.strip())
    if match is None:
        return ChoiceInput(value=NO_CHOICE)
    value = int(match.group(0))
    if value < 0:
        return ChoiceInput(value=NO_CHOICE)
    if value > page_count:
        return ChoiceInput(value=NO_CHOICE, error=OUT_OF_BOUNDS_MESSAGE)
    return ChoiceInput(value=value)


def apply_page_edit(story: Story, index: int, edit: PageEditEvent) -> Page:
    """Apply an edit event to the page at `index` and return the page."""
    page = story.page_at(index)
    if edit.text is not None:
        page.text = edit.text
    if edit.clear_image:
        page.image = None
    elif edit.image is not None:
        page.image = edit.image
    if edit.choice1 is not None:
        page.choice1 = edit.choice1
    if edit.choice2 is not None:
        page.choice2 = edit.choice2
    return page
