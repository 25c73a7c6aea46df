"""Base template definition."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateConfig:
    """Definition of a project template.

    ``repo`` is a source identifier understood by the fetcher, e.g.
    ``github:owner/name``, ``gitlab:owner/name/subdir#ref``.
    """

    repo: str
    description: str
    required_files: tuple[str, ...] = ()
