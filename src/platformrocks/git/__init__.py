"""Git operations for platformrocks."""

from platformrocks.errors import GitError
from platformrocks.git.operations import (
    INITIAL_COMMIT_MESSAGE,
    initialize_git,
    is_git_available,
)

__all__ = [
    "GitError",
    "INITIAL_COMMIT_MESSAGE",
    "initialize_git",
    "is_git_available",
]
