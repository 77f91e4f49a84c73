from __future__ import annotations

import pytest

from storybook.core.authoring import parse_choice_input
from storybook.core.page_graph import (
    choice_edges,
    find_choice_issues,
    format_issue,
    reachable_page_indices,
    terminal_page_indices,
)
from storybook.domain.errors import PageIndexError
from storybook.domain.models import OUT_OF_BOUNDS_MESSAGE, Page, Story


def _story() -> Story:
    return Story(
        title="Caves",
        author="B",
        pages=[
            Page(choice1=2, choice2=7),
            Page(choice1=1, choice2=3),
            Page(),
            Page(choice1=3),
        ],
    )


def test_find_choice_issues_flags_choices_past_last_page() -> None:
    issues = find_choice_issues(_story())
    assert len(issues) == 1
    assert issues[0].page_number == 1
    assert issues[0].slot == 2
    assert issues[0].choice == 7
    assert format_issue(issues[0]) == "page 1 choice 2: Page index out of bounds (7)"


def test_find_choice_issues_clears_after_pages_are_added() -> None:
    story = _story()
    for _ in range(3):
        story.add_page(Page())
    assert find_choice_issues(story) == []


def test_choice_edges_skip_absent_and_dangling_choices() -> None:
    assert choice_edges(_story()) == [(0, 1), (1, 0), (1, 2), (3, 2)]


def test_reachable_page_indices_follow_choices_from_start() -> None:
    story = _story()
    assert reachable_page_indices(story) == [0, 1, 2]
    assert reachable_page_indices(story, start=3) == [2, 3]


def test_reachable_page_indices_empty_story() -> None:
    assert reachable_page_indices(Story(title="T", author="A")) == []


def test_reachable_page_indices_rejects_bad_start() -> None:
    with pytest.raises(PageIndexError):
        reachable_page_indices(_story(), start=9)


def test_terminal_page_indices() -> None:
    assert terminal_page_indices(_story()) == [2]


def test_choice_issue_message_matches_editor_message() -> None:
    story = _story()
    issue = find_choice_issues(story)[0]
    assert issue.message == OUT_OF_BOUNDS_MESSAGE
    assert parse_choice_input("7", story.page_count).error == issue.message
