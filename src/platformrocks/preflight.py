"""Preflight checks to validate the environment before scaffolding."""

import logging
import re

import httpx

from platformrocks.config import Settings
from platformrocks.errors import NetworkError, ValidationError
from platformrocks.git import is_git_available
from platformrocks.process import ProcessRunner

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_major_version(version: str) -> int | None:
    """Extract the major number from strings like ``v20.11.1``."""
    match = _VERSION_PATTERN.search(version.strip())
    if match is None:
        return None
    return int(match.group(1))


def check_node_version(runner: ProcessRunner, min_major: int) -> str:
    """Ensure Node.js ``min_major`` or newer is installed.

    Returns the reported version string.
    """
    result = runner.run("node", ["--version"])
    if not result.ok:
        raise ValidationError(
            f"Node.js {min_major}+ is required. Node.js was not found in PATH."
        )

    version = result.stdout.strip()
    major = parse_major_version(version)
    if major is None or major < min_major:
        raise ValidationError(
            f"Node.js {min_major}+ is required. Current version: {version or 'unknown'}"
        )
    return version


def check_git(runner: ProcessRunner) -> None:
    """Ensure git is invokable."""
    if not is_git_available(runner):
        raise ValidationError(
            "Git not found in PATH. Install Git or use --no-git flag."
        )


def check_network_connectivity(
    url: str,
    timeout: float,
    client: httpx.Client | None = None,
) -> None:
    """Probe ``url`` as a proxy for being online."""
    prefix = "Cannot reach GitHub. Check your internet connection"
    try:
        if client is not None:
            response = client.get(url, timeout=timeout)
        else:
            response = httpx.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        raise NetworkError(f"{prefix}: {e}") from e

    if not response.is_success:
        raise NetworkError(
            f"{prefix}: GitHub API returned non-OK status {response.status_code}"
        )


def run_all_checks(
    runner: ProcessRunner,
    settings: Settings,
    *,
    require_git: bool,
    client: httpx.Client | None = None,
) -> list[str]:
    """Run every preflight check, stopping at the first failure.

    Returns a short description of each passed check.
    """
    passed: list[str] = []

    node_version = check_node_version(runner, settings.min_node_major)
    logger.debug("Node.js %s", node_version)
    passed.append(f"Node.js version {node_version}")

    if require_git:
        check_git(runner)
        passed.append("Git availability")

    check_network_connectivity(
        settings.connectivity_url, settings.connectivity_timeout, client
    )
    passed.append("Network connectivity")

    return passed
