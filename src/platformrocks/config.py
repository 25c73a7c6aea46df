"""Invocation options and environment-driven settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_TEMPLATE = "web"
DEFAULT_CONNECTIVITY_URL = "https://api.github.com/zen"
DEFAULT_CONNECTIVITY_TIMEOUT = 5.0
DEFAULT_MIN_NODE_MAJOR = 18


@dataclass(frozen=True)
class CreateOptions:
    """Resolved options for a single `platformrocks` invocation.

    Built once from CLI input and never mutated afterwards.
    """

    template: str = DEFAULT_TEMPLATE
    pm: str | None = None  # None means auto-detect
    git: bool = True
    install: bool = True
    force: bool = False
    dry_run: bool = False
    verbose: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class Settings:
    """Ambient settings that are not exposed as CLI flags."""

    connectivity_url: str = DEFAULT_CONNECTIVITY_URL
    connectivity_timeout: float = DEFAULT_CONNECTIVITY_TIMEOUT
    min_node_major: int = DEFAULT_MIN_NODE_MAJOR
    auth_token: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Create settings from environment variables.

        Recognised variables:
        - PLATFORMROCKS_CONNECTIVITY_URL
        - PLATFORMROCKS_CONNECTIVITY_TIMEOUT (seconds)
        - PLATFORMROCKS_MIN_NODE (major version)
        - GIGET_AUTH, then GITHUB_TOKEN (token for private templates)

        Unset or unparsable values fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        timeout = DEFAULT_CONNECTIVITY_TIMEOUT
        timeout_raw = env.get("PLATFORMROCKS_CONNECTIVITY_TIMEOUT")
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                timeout = DEFAULT_CONNECTIVITY_TIMEOUT

        min_node = DEFAULT_MIN_NODE_MAJOR
        min_node_raw = env.get("PLATFORMROCKS_MIN_NODE")
        if min_node_raw:
            try:
                min_node = int(min_node_raw)
            except ValueError:
                min_node = DEFAULT_MIN_NODE_MAJOR

        return cls(
            connectivity_url=(
                env.get("PLATFORMROCKS_CONNECTIVITY_URL") or DEFAULT_CONNECTIVITY_URL
            ),
            connectivity_timeout=timeout,
            min_node_major=min_node,
            auth_token=env.get("GIGET_AUTH") or env.get("GITHUB_TOKEN") or None,
        )
