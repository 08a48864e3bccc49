"""Core filesystem, archive index and cache for the zip overlay."""
