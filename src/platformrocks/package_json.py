"""Rename the package in a freshly downloaded template."""

import json
import logging
from pathlib import Path

from platformrocks.interaction import ConsoleInteraction, UserInteraction

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"


def update_package_name(
    project_dir: Path,
    name: str,
    interaction: UserInteraction | None = None,
) -> bool:
    """Set the ``name`` field of ``project_dir/package.json``.

    Failures never propagate: they are reported as a warning and False is
    returned, so a wrong package name cannot block an otherwise good scaffold.
    """
    path = Path(project_dir) / PACKAGE_JSON
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{PACKAGE_JSON} does not contain a JSON object")
        data["name"] = name
        path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
    except (OSError, ValueError) as e:
        logger.debug("Could not patch %s", path, exc_info=True)
        (interaction or ConsoleInteraction()).report(
            "warning", f"Warning: Could not update package.json name: {e}"
        )
        return False
    return True
