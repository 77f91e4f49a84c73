from __future__ import annotations

import pytest

from storybook.domain.errors import DeadEndChoiceError, PageIndexError
from storybook.domain.models import NO_CHOICE, Page, Story


def _branching_story() -> Story:
    return Story(
        title="Forest",
        author="Ada",
        pages=[
            Page(text="A fork in the path.", choice1=2, choice2=3),
            Page(text="The left path ends at a river.", choice1=1),
            Page(text="The right path ends at home."),
        ],
    )


def test_new_story_starts_at_first_page() -> None:
    story = Story(title="T", author="A")
    assert story.page_count == 0
    assert story.current_page_index == 0


def test_turn_to_sets_cursor_and_returns_page() -> None:
    story = _branching_story()
    page = story.turn_to(2)
    assert story.current_page_index == 2
    assert page is story.pages[2]
    assert story.current_page() is page


def test_turn_to_is_idempotent() -> None:
    story = _branching_story()
    first = story.turn_to(1)
    second = story.turn_to(1)
    assert first is second
    assert story.current_page_index == 1


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_turn_to_rejects_out_of_range_index(index: int) -> None:
    story = _branching_story()
    story.turn_to(1)
    with pytest.raises(PageIndexError, match=f"page index {index} out of range"):
        story.turn_to(index)
    assert story.current_page_index == 1


def test_page_index_error_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        Story(title="T", author="A").page_at(0)


def test_current_page_on_empty_story_raises() -> None:
    with pytest.raises(PageIndexError):
        Story(title="T", author="A").current_page()


def test_follow_choice_uses_one_based_page_numbers() -> None:
    story = _branching_story()
    page = story.follow_choice(2)
    assert story.current_page_index == 2
    assert page.text == "The right path ends at home."


def test_follow_choice_rejects_absent_choice() -> None:
    story = _branching_story()
    story.turn_to(2)
    with pytest.raises(DeadEndChoiceError, match="page 3 has no choice 1"):
        story.follow_choice(1)
    assert story.current_page_index == 2


def test_follow_choice_rejects_dangling_choice() -> None:
    story = Story(title="T", author="A", pages=[Page(choice1=5)])
    with pytest.raises(PageIndexError):
        story.follow_choice(1)
    assert story.current_page_index == 0


def test_choice_target_never_maps_zero_to_a_page() -> None:
    story = _branching_story()
    assert story.choice_target(story.pages[2], 1) is None
    assert story.choice_target(story.pages[0], 1) == 1


def test_restart_returns_to_first_page() -> None:
    story = _branching_story()
    story.turn_to(2)
    assert story.restart() is story.pages[0]
    assert story.current_page_index == 0


def test_choice_bounds_use_current_page_count() -> None:
    story = Story(title="T", author="A", pages=[Page(choice1=2)])
    assert story.is_choice_in_bounds(2) is False
    assert story.is_choice_out_of_bounds(2) is True
    story.add_page(Page())
    assert story.is_choice_in_bounds(2) is True
    assert story.is_choice_out_of_bounds(2) is False


def test_choice_equal_to_page_count_is_in_bounds() -> None:
    story = _branching_story()
    assert story.is_choice_in_bounds(3) is True
    assert story.is_choice_out_of_bounds(3) is False


def test_zero_choice_is_neither_followable_nor_flagged() -> None:
    story = _branching_story()
    assert story.is_choice_in_bounds(NO_CHOICE) is False
    assert story.is_choice_out_of_bounds(NO_CHOICE) is False


def test_page_choice_slots() -> None:
    page = Page()
    page.set_choice(1, 4)
    page.set_choice(2, 7)
    assert page.choices == (4, 7)
    assert page.choice(2) == 7
    with pytest.raises(ValueError, match="choice slot must be 1 or 2"):
        page.choice(3)


def test_page_image_presence() -> None:
    assert Page().has_image is False
    assert Page(image=b"").has_image is True
