from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from storybook.api.contracts import (
    PageEdit,
    load_story_summary_json,
    save_story_summary_json,
    summarize_story,
)
from storybook.domain.models import Page, Story


def _story() -> Story:
    return Story(
        title="Maze",
        author="Ro",
        pages=[
            Page(text="Start   here.\nGo on.", choice1=2, choice2=9),
            Page(text="x" * 200, image=b"abcd"),
            Page(text="Lost page."),
        ],
    )


def test_summarize_story_reports_pages_issues_and_reachability() -> None:
    summary = summarize_story(_story())
    assert summary.page_count == 3
    assert summary.pages[0].text_preview == "Start here. Go on."
    assert summary.pages[1].text_preview.endswith("...")
    assert len(summary.pages[1].text_preview) == 80
    assert summary.pages[1].has_image is True
    assert summary.pages[1].image_bytes == 4
    assert [issue.choice for issue in summary.choice_issues] == [9]
    assert summary.unreachable_page_numbers == [3]
    assert summary.pages[2].reachable is False


def test_summarize_empty_story() -> None:
    summary = summarize_story(Story(title="T", author="A"))
    assert summary.page_count == 0
    assert summary.pages == []
    assert summary.unreachable_page_numbers == []


def test_story_summary_json_roundtrip(tmp_path: Path) -> None:
    summary = summarize_story(_story())
    path = tmp_path / "out" / "summary.json"
    save_story_summary_json(path, summary)
    assert load_story_summary_json(path) == summary


def test_page_edit_rejects_choice_outside_u16() -> None:
    with pytest.raises(ValidationError):
        PageEdit(choice1=65536)
    with pytest.raises(ValidationError):
        PageEdit(choice2=-1)


def test_page_edit_rejects_set_and_clear_image() -> None:
    with pytest.raises(ValidationError, match="both set and clear"):
        PageEdit(image=b"img", clear_image=True)


def test_page_edit_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        PageEdit.model_validate({"text": "x", "choice3": 1})
