"""Repository initialization for a freshly scaffolded project."""

import logging
from pathlib import Path

from platformrocks.errors import GitError
from platformrocks.process import ProcessRunner, SubprocessRunner

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit"


def is_git_available(runner: ProcessRunner | None = None) -> bool:
    """Check if git can be invoked."""
    runner = runner or SubprocessRunner()
    return runner.run("git", ["--version"]).ok


def initialize_git(cwd: Path, runner: ProcessRunner | None = None) -> None:
    """Create a repository in ``cwd`` holding one commit of every file.

    Raises GitError on the first git command that fails.
    """
    runner = runner or SubprocessRunner()
    steps: list[list[str]] = [
        ["--version"],
        ["init"],
        ["add", "."],
        ["commit", "-m", INITIAL_COMMIT_MESSAGE],
    ]
    for args in steps:
        # --version only proves git exists; it runs outside the project.
        result = runner.run("git", args, cwd=None if args == ["--version"] else cwd)
        if not result.ok:
            raise GitError(
                f"Failed to initialize git repository: {result.error_detail()}"
            )
    logger.debug("Initialized git repository in %s", cwd)
