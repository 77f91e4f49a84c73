"""Storybook codec, page-graph checks and authoring helpers."""
