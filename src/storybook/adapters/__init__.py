"""Filesystem and runtime adapters."""
