"""Public contracts for editors, viewers and tooling."""

from storybook.api.contracts import (
    ChoiceIssueResponse,
    PageEdit,
    PageSummary,
    StorySummary,
    load_story_summary_json,
    save_story_summary_json,
    summarize_story,
)

__all__ = [
    "ChoiceIssueResponse",
    "PageEdit",
    "PageSummary",
    "StorySummary",
    "load_story_summary_json",
    "save_story_summary_json",
    "summarize_story",
]
