"""Static checks over the implicit page graph of a story."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from storybook.domain.models import CHOICE_SLOTS, NO_CHOICE, OUT_OF_BOUNDS_MESSAGE, Story


@dataclass(frozen=True)
class ChoiceIssue:
    """A choice that points past the last page."""

    page_number: int
    slot: int
    choice: int
    message: str


def format_issue(issue: ChoiceIssue) -> str:
    return f"page {issue.page_number} choice {issue.slot}: {issue.message} ({issue.choice})"


def find_choice_issues(story: Story) -> list[ChoiceIssue]:
    """List choices that are out of bounds for the story's current page count."""
    issues: list[ChoiceIssue] = []
    for page_number, page in enumerate(story.pages, start=1):
        for slot in CHOICE_SLOTS:
            value = page.choice(slot)
            if story.is_choice_out_of_bounds(value):
                issues.append(
                    ChoiceIssue(
                        page_number=page_number,
                        slot=slot,
                        choice=value,
                        message=OUT_OF_BOUNDS_MESSAGE,
                    )
                )
    return issues


def choice_edges(story: Story) -> list[tuple[int, int]]:
    """Return 0-based (source, target) pairs for every followable choice."""
    edges: list[tuple[int, int]] = []
    for index, page in enumerate(story.pages):
        for value in page.choices:
            if value != NO_CHOICE and story.is_choice_in_bounds(value):
                edges.append((index, value - 1))
    return edges


def reachable_page_indices(story: Story, start: int = 0) -> list[int]:
    if not story.pages:
        return []
    story.page_at(start)  # rejects a bad start index
    adjacency: dict[int, list[int]] = {index: [] for index in range(story.page_count)}
    for source, target in choice_edges(story):
        adjacency[source].append(target)

    seen = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for target in adjacency[node]:
            if target not in seen:
                seen.add(target)
                queue.append(target)
    return sorted(seen)


def terminal_page_indices(story: Story) -> list[int]:
    """Pages a reader cannot leave: no followable choice."""
    sources = {source for source, _ in choice_edges(story)}
    return [index for index in range(story.page_count) if index not in sources]
