"""Create a new project from a registered template."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx

from platformrocks.config import CreateOptions, Settings
from platformrocks.directory import validate_directory
from platformrocks.errors import ValidationError
from platformrocks.git import initialize_git
from platformrocks.interaction import ConsoleInteraction, UserInteraction
from platformrocks.package_json import update_package_name
from platformrocks.package_managers import (
    detect_package_manager,
    get_package_manager_by_name,
    install_dependencies,
)
from platformrocks.preflight import run_all_checks
from platformrocks.process import ProcessRunner, SubprocessRunner
from platformrocks.templates import TemplateConfig, TemplateFetcher, get_template

logger = logging.getLogger(__name__)

APP_NAME_PROMPT = "What is the name of your project?"


class ProjectCreator:
    """Runs the scaffolding steps for one invocation.

    Steps run strictly in order and the first failure aborts the run. Nothing
    already done is rolled back. Patching package.json is the only step whose
    failure is downgraded to a warning.
    """

    def __init__(
        self,
        options: CreateOptions,
        *,
        interaction: UserInteraction | None = None,
        runner: ProcessRunner | None = None,
        client: httpx.Client | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.options = options
        self.ui = interaction or ConsoleInteraction()
        self.runner = runner or SubprocessRunner()
        self.client = client
        self.settings = settings or Settings.from_env()
        self.fetcher = TemplateFetcher(client=client, auth_token=self.settings.auth_token)

    def create(self, app_name: str | None) -> Path | None:
        """Create the project and return its path.

        Returns None if the user cancels the name prompt. In dry-run mode the
        path is returned without anything being written.
        """
        self.ui.report("info", "@platformrocks/create")
        self.ui.report("dim", "Bootstrap CLI for OpenSource.Rocks projects")

        self.validate_environment()

        name = (app_name or "").strip() or self._ask_app_name()
        if name is None:
            self.ui.report("warning", "Project creation cancelled.")
            return None

        project_path = Path(name).resolve()
        template = get_template(self.options.template)
        self._show_configuration(name, project_path, template)

        if self.options.dry_run:
            self.show_dry_run_plan(name, project_path, template)
            return project_path

        self.execute_creation_steps(name, project_path, template)
        return project_path

    def validate_environment(self) -> None:
        """Check Node.js, git (when requested) and network access."""
        self.ui.report("step", "Validating environment...")
        try:
            passed = run_all_checks(
                self.runner,
                self.settings,
                require_git=self.options.git,
                client=self.client,
            )
        except Exception:
            self.ui.report("error", "Environment validation failed")
            raise
        for check in passed:
            self.ui.report("dim", f"  {check} ✓")
        self.ui.report("success", "Environment validation complete")

    def show_dry_run_plan(
        self, name: str, project_path: Path, template: TemplateConfig
    ) -> None:
        """Print the steps a real run would execute."""
        self.ui.report("warning", "Dry Run Mode - No changes will be made")
        self.ui.report("plain", "Steps that would be executed:")
        self.ui.report("plain", f"  1. Validate directory: {project_path}")
        self.ui.report("plain", f"  2. Download template: {template.repo}")
        self.ui.report("plain", f'  3. Update package.json: Set name to "{project_path.name}"')

        if self.options.install:
            pm = self._resolve_package_manager()
            self.ui.report("plain", f"  4. Install dependencies: Using {pm}")
        else:
            self.ui.report("dim", "  4. Skip dependency installation (--no-install)")

        if self.options.git:
            self.ui.report(
                "plain", "  5. Initialize git: git init && git add . && git commit"
            )
        else:
            self.ui.report("dim", "  5. Skip git initialization (--no-git)")

        self.ui.report("plain", "  6. Show next steps")
        self.ui.report("success", "Dry run complete. Use without --dry-run to execute.")

    def execute_creation_steps(
        self, name: str, project_path: Path, template: TemplateConfig
    ) -> None:
        """Run every step for real."""
        with self._stage("Validating directory", "Directory validated"):
            validate_directory(project_path, self.options.force)

        with self._stage(
            f"Downloading template from {template.repo}", "Template downloaded"
        ):
            self.fetcher.fetch(template.repo, project_path)
            self._check_required_files(project_path, template)

        with self._stage("Updating package.json", "Package configuration updated"):
            update_package_name(project_path, project_path.name, self.ui)

        pm = self._resolve_package_manager()

        if self.options.install:
            with self._stage(
                f"Installing dependencies with {pm}", "Dependencies installed"
            ):
                install_dependencies(
                    pm, project_path, self.options.verbose, runner=self.runner
                )
        else:
            self.ui.report("warning", "Skipped dependency installation")

        if self.options.git:
            with self._stage("Initializing git repository", "Git repository initialized"):
                initialize_git(project_path, runner=self.runner)
        else:
            self.ui.report("warning", "Skipped git initialization")

        self.print_next_steps(name, pm)

    def print_next_steps(self, name: str, pm: str) -> None:
        manager = get_package_manager_by_name(pm)
        dev_command = manager.script_command("dev") if manager else f"{pm} dev"

        self.ui.report("success", "Project created successfully!")
        self.ui.report("plain", "Next steps:")
        self.ui.report("info", f"  cd {name}")
        self.ui.report("info", f"  {dev_command}")
        self.ui.report("plain", "Happy coding! Let's Rock!")

    @contextmanager
    def _stage(self, running: str, done: str) -> Iterator[None]:
        self.ui.report("step", f"{running}...")
        try:
            yield
        except Exception:
            self.ui.report("error", f"{running} failed")
            raise
        self.ui.report("success", done)

    def _ask_app_name(self) -> str | None:
        answer = self.ui.ask_text(APP_NAME_PROMPT)
        if answer is None or not answer.strip():
            return None
        return answer.strip()

    def _resolve_package_manager(self) -> str:
        if self.options.pm:
            return self.options.pm
        return detect_package_manager(runner=self.runner)

    def _show_configuration(
        self, name: str, project_path: Path, template: TemplateConfig
    ) -> None:
        self.ui.report("info", "Configuration:")
        self.ui.report("plain", f"  Project name: {name}")
        self.ui.report(
            "plain", f"  Template: {self.options.template} ({template.description})"
        )
        self.ui.report("plain", f"  Directory: {project_path}")
        self.ui.report("plain", f"  Package manager: {self.options.pm or 'auto-detect'}")
        self.ui.report(
            "plain", f"  Git initialization: {'yes' if self.options.git else 'no'}"
        )
        self.ui.report(
            "plain",
            f"  Install dependencies: {'yes' if self.options.install else 'no'}",
        )

    @staticmethod
    def _check_required_files(project_path: Path, template: TemplateConfig) -> None:
        missing = [
            required
            for required in template.required_files
            if not (project_path / required).exists()
        ]
        if missing:
            raise ValidationError(
                f"Invalid template {template.repo}: missing {', '.join(missing)}"
            )


def create_web(
    app_name: str | None,
    options: CreateOptions,
    *,
    interaction: UserInteraction | None = None,
    runner: ProcessRunner | None = None,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> Path | None:
    """Scaffold a project named ``app_name`` according to ``options``."""
    creator = ProjectCreator(
        options,
        interaction=interaction,
        runner=runner,
        client=client,
        settings=settings,
    )
    return creator.create(app_name)
