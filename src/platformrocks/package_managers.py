"""Package manager definitions, detection and dependency installation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from platformrocks.errors import DependencyError, UnknownPackageManagerError
from platformrocks.process import ProcessRunner, SubprocessRunner

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_MANAGER = "npm"


@dataclass(frozen=True)
class PackageManager:
    """Definition of a JavaScript package manager."""

    name: str
    lockfile: str
    install_args: tuple[str, ...] = ("install",)
    run_prefix: str = ""  # how scripts are run, e.g. "npm run dev"

    def script_command(self, script: str) -> str:
        """Command line that runs a package.json script."""
        return f"{self.run_prefix or self.name} {script}"

    def is_available(self, runner: ProcessRunner) -> bool:
        """Check the executable responds to --version."""
        return runner.run(self.name, ["--version"]).ok


BUN = PackageManager(name="bun", lockfile="bun.lockb")
PNPM = PackageManager(name="pnpm", lockfile="pnpm-lock.yaml")
YARN = PackageManager(name="yarn", lockfile="yarn.lock")
NPM = PackageManager(name="npm", lockfile="package-lock.json", run_prefix="npm run")

# Detection priority, highest first.
PACKAGE_MANAGERS: tuple[PackageManager, ...] = (BUN, PNPM, YARN, NPM)

# npm has no lockfile check: package-lock.json is also what it falls back to.
_LOCKFILE_MANAGERS: tuple[PackageManager, ...] = (BUN, PNPM, YARN)


def get_package_manager_by_name(name: str) -> PackageManager | None:
    """Find a package manager by exact name."""
    for manager in PACKAGE_MANAGERS:
        if manager.name == name:
            return manager
    return None


def detect_package_manager(
    cwd: Path | None = None,
    runner: ProcessRunner | None = None,
) -> str:
    """Pick the package manager to use.

    Resolution order:
    1. Lockfile in ``cwd`` (bun, then pnpm, then yarn)
    2. First manager on PATH (bun, pnpm, yarn, npm)
    3. npm
    """
    directory = cwd or Path.cwd()
    for manager in _LOCKFILE_MANAGERS:
        if (directory / manager.lockfile).exists():
            logger.debug("Found %s, using %s", manager.lockfile, manager.name)
            return manager.name

    runner = runner or SubprocessRunner()
    for manager in PACKAGE_MANAGERS:
        if manager.is_available(runner):
            logger.debug("Found %s on PATH", manager.name)
            return manager.name

    logger.debug("No package manager found, defaulting to %s", DEFAULT_PACKAGE_MANAGER)
    return DEFAULT_PACKAGE_MANAGER


def install_dependencies(
    pm: str,
    cwd: Path,
    verbose: bool = False,
    runner: ProcessRunner | None = None,
) -> None:
    """Install project dependencies with the named package manager.

    Output goes straight to the terminal when ``verbose`` is set.
    """
    manager = get_package_manager_by_name(pm)
    if manager is None:
        raise UnknownPackageManagerError(f"Unknown package manager: {pm}")

    runner = runner or SubprocessRunner()
    result = runner.run(manager.name, manager.install_args, cwd=cwd, stream=verbose)
    if not result.ok:
        raise DependencyError(
            f"Failed to install dependencies with {pm}: {result.error_detail()}"
        )
