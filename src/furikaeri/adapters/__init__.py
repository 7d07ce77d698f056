"""Adapters - I/O implementations of ports."""

from .github_contents import GitHubContentsStore
from .file_mirror import FileMirror

__all__ = [
    "GitHubContentsStore",
    "FileMirror",
]
