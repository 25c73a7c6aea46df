"""Error taxonomy and exit-code classification."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, one per error category."""

    SUCCESS = 0
    NETWORK_ERROR = 1
    PERMISSION_ERROR = 2
    VALIDATION_ERROR = 3
    DEPENDENCY_ERROR = 4
    UNKNOWN_ERROR = 5


class ScaffoldError(Exception):
    """Base exception for project creation failures.

    Subclasses pin an exit code. ``None`` leaves classification to the
    message keywords.
    """

    exit_code: ExitCode | None = None


class ValidationError(ScaffoldError):
    """Raised for bad or missing input and unusable targets."""

    exit_code = ExitCode.VALIDATION_ERROR


class DirectoryNotEmptyError(ValidationError):
    """Raised when the target directory already holds files."""


class UnknownTemplateError(ValidationError):
    """Raised when a template name is not in the registry."""


class UnknownPackageManagerError(ValidationError):
    """Raised when a package manager name is not supported."""


class NetworkError(ScaffoldError):
    """Raised when a remote endpoint cannot be reached."""

    exit_code = ExitCode.NETWORK_ERROR


class DownloadError(NetworkError):
    """Raised when a template archive cannot be fetched or extracted."""


class DependencyError(ScaffoldError):
    """Raised when the package manager fails to install dependencies."""

    exit_code = ExitCode.DEPENDENCY_ERROR


class GitError(ScaffoldError):
    """Raised when a git subprocess fails."""


# Checked in order; the first category with a matching keyword wins.
_KEYWORDS: tuple[tuple[ExitCode, tuple[str, ...]], ...] = (
    (ExitCode.NETWORK_ERROR, ("internet", "network", "GitHub")),
    (ExitCode.PERMISSION_ERROR, ("permission", "EACCES", "EPERM")),
    (ExitCode.VALIDATION_ERROR, ("Invalid", "Unknown", "required")),
    (ExitCode.DEPENDENCY_ERROR, ("install", "dependencies")),
)

SUGGESTIONS: dict[ExitCode, str] = {
    ExitCode.NETWORK_ERROR: "Try again when you have a stable internet connection",
    ExitCode.PERMISSION_ERROR: (
        "Try running with elevated permissions or choose a different directory"
    ),
    ExitCode.VALIDATION_ERROR: "Use --help to see available options and examples",
    ExitCode.DEPENDENCY_ERROR: (
        "You can skip dependency installation with --no-install "
        "and run it manually later"
    ),
}


def classify_message(message: str) -> ExitCode:
    """Map an error message to an exit code by keyword."""
    for code, keywords in _KEYWORDS:
        if any(keyword in message for keyword in keywords):
            return code
    return ExitCode.UNKNOWN_ERROR


def classify_error(error: BaseException) -> ExitCode:
    """Resolve the exit code for an exception.

    Resolution order:
    1. The exit code pinned on a ScaffoldError subclass
    2. Builtin PermissionError (filesystem denial)
    3. Keywords in the error message
    """
    if isinstance(error, ScaffoldError) and error.exit_code is not None:
        return error.exit_code
    if isinstance(error, PermissionError):
        return ExitCode.PERMISSION_ERROR
    return classify_message(str(error))


def suggestion_for(code: ExitCode) -> str | None:
    """Return the actionable hint shown next to an error, if any."""
    return SUGGESTIONS.get(code)
