"""Directory traversal package."""

from .discovery import (
    FileSnapshot,
    WalkProfile,
    read_text_file,
    walk,
    walk_with_content,
    walk_with_content_parallel,
)

__all__ = [
    "FileSnapshot",
    "WalkProfile",
    "read_text_file",
    "walk",
    "walk_with_content",
    "walk_with_content_parallel",
]
