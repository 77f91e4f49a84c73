"""Story and page models with page-graph navigation."""

from __future__ import annotations

from dataclasses import dataclass, field

from storybook.domain.errors import DeadEndChoiceError, PageIndexError

NO_CHOICE = 0
CHOICE_SLOTS = (1, 2)
OUT_OF_BOUNDS_MESSAGE = "Page index out of bounds"


def _check_slot(slot: int) -> None:
    if slot not in CHOICE_SLOTS:
        raise ValueError(f"choice slot must be 1 or 2, got {slot}")


@dataclass
class Page:
    """One node of the story graph.

    Choices are 1-based page numbers; `NO_CHOICE` marks an absent branch.
    They are not validated here because pages may be appended after a choice
    is authored.
    """

    text: str = ""
    image: bytes | None = None
    choice1: int = NO_CHOICE
    choice2: int = NO_CHOICE

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def choices(self) -> tuple[int, int]:
        return (self.choice1, self.choice2)

    def choice(self, slot: int) -> int:
        _check_slot(slot)
        return self.choice1 if slot == 1 else self.choice2

    def set_choice(self, slot: int, value: int) -> None:
        _check_slot(slot)
        if slot == 1:
            self.choice1 = value
        else:
            self.choice2 = value


@dataclass
class Story:
    """Ordered pages plus the reader's cursor."""

    title: str
    author: str
    pages: list[Page] = field(default_factory=list)
    current_page_index: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self, page: Page) -> None:
        self.pages.append(page)

    def page_at(self, index: int) -> Page:
        if not 0 <= index < len(self.pages):
            raise PageIndexError(
                f"page index {index} out of range for story with {len(self.pages)} pages"
            )
        return self.pages[index]

    def current_page(self) -> Page:
        return self.page_at(self.current_page_index)

    def turn_to(self, index: int) -> Page:
        page = self.page_at(index)
        self.current_page_index = index
        return page

    def restart(self) -> Page:
        return self.turn_to(0)

    def choice_target(self, page: Page, slot: int) -> int | None:
        """Return the 0-based index a choice points at, or None when absent."""
        value = page.choice(slot)
        if value == NO_CHOICE:
            return None
        return value - 1

    def follow_choice(self, slot: int) -> Page:
        """Turn to the page named by the current page's choice in `slot`."""
        page = self.current_page()
        target = self.choice_target(page, slot)
        if target is None:
            raise DeadEndChoiceError(
                f"page {self.current_page_index + 1} has no choice {slot}"
            )
        return self.turn_to(target)

    def is_choice_in_bounds(self, choice: int) -> bool:
        return 1 <= choice <= len(self.pages)

    def is_choice_out_of_bounds(self, choice: int) -> bool:
        return choice > len(self.pages)
