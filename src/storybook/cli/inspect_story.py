"""CLI for inspecting `.storybook` files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from storybook.adapters.observability import configure_runtime_logging
from storybook.adapters.storybook_files import STORYBOOK_SUFFIX, load_story
from storybook.api.contracts import StorySummary, save_story_summary_json, summarize_story
from storybook.domain.errors import StorybookError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Define CLI flags for storybook inspection."""
    parser = argparse.ArgumentParser(description="Decode a storybook file and summarize it.")
    parser.add_argument("--input", required=True, help="Path to a .storybook file.")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON.")
    parser.add_argument(
        "--output",
        default="",
        help="Optional path to write the JSON summary.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error when any choice points past the last page.",
    )
    return parser


def render_summary(summary: StorySummary) -> str:
    lines = [
        f"{summary.title} - By: {summary.author}",
        f"pages: {summary.page_count}",
    ]
    for page in summary.pages:
        choices = ", ".join(
            f"turn to page {choice}" for choice in (page.choice1, page.choice2) if choice > 0
        )
        image_note = f" [image {page.image_bytes} bytes]" if page.has_image else ""
        lines.append(
            f"  Page {page.page_number}:{image_note} {page.text_preview!r} -> {choices or 'end'}"
        )
    if summary.choice_issues:
        lines.append("choice issues:")
        for issue in summary.choice_issues:
            lines.append(
                f"  page {issue.page_number} choice {issue.slot}: {issue.message} ({issue.choice})"
            )
    else:
        lines.append("choice issues: none")
    if summary.unreachable_page_numbers:
        lines.append(f"unreachable pages: {summary.unreachable_page_numbers}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """Load a storybook, print its summary and optionally export JSON."""
    configure_runtime_logging()
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)

    input_path = Path(str(parsed.input))
    if input_path.suffix != STORYBOOK_SUFFIX:
        logger.warning("storybook.inspect unexpected_suffix path=%s", input_path)
    try:
        story = load_story(input_path)
    except FileNotFoundError as exc:
        raise SystemExit(f"Storybook not found: {input_path}") from exc
    except StorybookError as exc:
        raise SystemExit(f"Failed to open storybook {input_path}: {exc}") from exc

    summary = summarize_story(story)
    if parsed.json:
        print(summary.model_dump_json(indent=2))
    else:
        print(render_summary(summary))

    output = str(parsed.output).strip()
    if output:
        save_story_summary_json(Path(output), summary)
        if not parsed.json:
            print(f"Wrote summary JSON: {output}")

    if parsed.strict and summary.choice_issues:
        raise SystemExit(f"{len(summary.choice_issues)} choice(s) point past the last page")


if __name__ == "__main__":
    main()
