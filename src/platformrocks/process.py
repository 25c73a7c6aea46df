"""Subprocess invocation behind a swappable runner."""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished subprocess."""

    command: str
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True when the process exited with status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join((self.command, *self.args))

    def error_detail(self) -> str:
        """Best available explanation of a failure."""
        output = self.stderr.strip() or self.stdout.strip()
        if output:
            return output
        return f"`{self.command_line}` exited with status {self.returncode}"


class ProcessRunner(ABC):
    """Runs external commands and reports their exit status."""

    @abstractmethod
    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stream: bool = False,
    ) -> ProcessResult:
        """Run ``command`` with ``args``.

        When ``stream`` is True the child inherits the terminal and nothing is
        captured. Otherwise stdout and stderr are captured on the result.
        """
        ...


class SubprocessRunner(ProcessRunner):
    """Runner backed by :func:`subprocess.run`."""

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stream: bool = False,
    ) -> ProcessResult:
        executable = shutil.which(command)
        if executable is None:
            logger.debug("Executable not found: %s", command)
            return ProcessResult(
                command, tuple(args), COMMAND_NOT_FOUND, stderr=f"{command}: command not found"
            )

        # Resolved path so Windows .cmd shims (npm, pnpm, yarn) can be spawned.
        argv = [executable, *args]
        logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd or ".")
        try:
            if stream:
                completed = subprocess.run(argv, cwd=cwd)
                return ProcessResult(command, tuple(args), completed.returncode)
            completed = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            logger.debug("Could not execute %s: %s", executable, e)
            return ProcessResult(
                command, tuple(args), COMMAND_NOT_FOUND, stderr=str(e)
            )
        return ProcessResult(
            command,
            tuple(args),
            completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
