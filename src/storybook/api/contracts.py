"""Typed contracts exchanged with editors, viewers and tooling."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storybook.core.page_graph import find_choice_issues, reachable_page_indices
from storybook.domain.models import Story

MAX_CHOICE = 0xFFFF
_TEXT_PREVIEW_CHARS = 80


class ContractModel(BaseModel):
    """Base model config used by all storybook contracts."""

    model_config = ConfigDict(extra="forbid")


class PageEdit(ContractModel):
    """Page-edit event raised by an editor; unset fields are left unchanged."""

    text: str | None = None
    image: bytes | None = None
    clear_image: bool = False
    choice1: int | None = Field(default=None, ge=0, le=MAX_CHOICE)
    choice2: int | None = Field(default=None, ge=0, le=MAX_CHOICE)

    @model_validator(mode="after")
    def _validate_image_change(self) -> PageEdit:
        if self.clear_image and self.image is not None:
            raise ValueError("An edit cannot both set and clear the page image.")
        return self


class ChoiceIssueResponse(ContractModel):
    page_number: int = Field(ge=1)
    slot: int = Field(ge=1, le=2)
    choice: int = Field(ge=0, le=MAX_CHOICE)
    message: str


class PageSummary(ContractModel):
    """Read model for one page."""

    page_number: int = Field(ge=1)
    text_preview: str
    text_length: int = Field(ge=0)
    has_image: bool
    image_bytes: int = Field(ge=0)
    choice1: int = Field(ge=0, le=MAX_CHOICE)
    choice2: int = Field(ge=0, le=MAX_CHOICE)
    reachable: bool


class StorySummary(ContractModel):
    """Read model describing a whole storybook."""

    title: str
    author: str
    page_count: int = Field(ge=0, le=0xFFFF)
    pages: list[PageSummary] = Field(default_factory=list)
    choice_issues: list[ChoiceIssueResponse] = Field(default_factory=list)
    unreachable_page_numbers: list[int] = Field(default_factory=list)


def summarize_story(story: Story) -> StorySummary:
    """Build the read model for `story` against its current page count."""
    reachable = set(reachable_page_indices(story))
    pages = [
        PageSummary(
            page_number=index + 1,
            text_preview=_preview(page.text),
            text_length=len(page.text),
            has_image=page.has_image,
            image_bytes=len(page.image) if page.image is not None else 0,
            choice1=page.choice1,
            choice2=page.choice2,
            reachable=index in reachable,
        )
        for index, page in enumerate(story.pages)
    ]
    issues = [
        ChoiceIssueResponse(
            page_number=issue.page_number,
            slot=issue.slot,
            choice=issue.choice,
            message=issue.message,
        )
        for issue in find_choice_issues(story)
    ]
    return StorySummary(
        title=story.title,
        author=story.author,
        page_count=story.page_count,
        pages=pages,
        choice_issues=issues,
        unreachable_page_numbers=[
            index + 1 for index in range(story.page_count) if index not in reachable
        ],
    )


def save_story_summary_json(path: Path, summary: StorySummary) -> None:
    """Persist a story summary as readable JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(summary.model_dump_json(indent=2) + "\n", encoding="utf-8")


def load_story_summary_json(path: Path) -> StorySummary:
    """Load and validate a story summary from disk."""
    return StorySummary.model_validate_json(path.read_text(encoding="utf-8"))


def _preview(text: str) -> str:
    flattened = " ".join(text.split())
    if len(flattened) <= _TEXT_PREVIEW_CHARS:
        return flattened
    return flattened[: _TEXT_PREVIEW_CHARS - 3] + "..."
