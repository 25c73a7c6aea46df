"""Shared fixtures: fake process runner, recording UI, template archives."""

import io
import json
import tarfile
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import httpx
import pytest

from platformrocks.config import Settings
from platformrocks.interaction import Level, UserInteraction
from platformrocks.process import COMMAND_NOT_FOUND, ProcessResult, ProcessRunner

TEMPLATE_TARBALL_PATH = "/repos/platformrocks/osr.boilerplate-web/tarball/main"


@dataclass(frozen=True)
class Call:
    """One recorded ProcessRunner.run invocation."""

    command: str
    args: tuple[str, ...]
    cwd: Path | None
    stream: bool

    @property
    def line(self) -> str:
        return " ".join((self.command, *self.args))


class FakeRunner(ProcessRunner):
    """Records invocations instead of spawning processes.

    Return codes are looked up by full command line first, then by command
    name, defaulting to 0. Commands listed in ``missing`` behave as if they
    were not on PATH.
    """

    def __init__(
        self,
        returncodes: Mapping[str, int] | None = None,
        outputs: Mapping[str, str] | None = None,
        missing: Iterable[str] = (),
    ) -> None:
        self.returncodes = dict(returncodes or {})
        self.outputs = {"node --version": "v20.11.1\n", **(outputs or {})}
        self.missing = set(missing)
        self.calls: list[Call] = []

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stream: bool = False,
    ) -> ProcessResult:
        call = Call(command, tuple(args), cwd, stream)
        self.calls.append(call)
        if command in self.missing:
            return ProcessResult(
                command, call.args, COMMAND_NOT_FOUND, stderr=f"{command}: not found"
            )
        code = self.returncodes.get(call.line, self.returncodes.get(command, 0))
        return ProcessResult(
            command,
            call.args,
            code,
            stdout=self.outputs.get(call.line, ""),
            stderr=f"{call.line} failed" if code else "",
        )

    @property
    def lines(self) -> list[str]:
        return [call.line for call in self.calls]


class RecordingInteraction(UserInteraction):
    """Scripted answers in, recorded messages out."""

    def __init__(self, answers: Iterable[str | None] = ()) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.messages: list[tuple[str, str]] = []

    def ask_text(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else None

    def report(self, level: Level, message: str) -> None:
        self.messages.append((level, message))

    def texts(self, level: str | None = None) -> list[str]:
        return [text for lvl, text in self.messages if level is None or lvl == level]

    @property
    def output(self) -> str:
        return "\n".join(self.texts())


def build_tarball(files: Mapping[str, str], root: str = "repo-main") -> bytes:
    """Build a gzipped tarball with every file nested under ``root``."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        directory = tarfile.TarInfo(root)
        directory.type = tarfile.DIRTYPE
        directory.mode = 0o755
        archive.addfile(directory)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{root}/{name}")
            info.size = len(data)
            info.mode = 0o644
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


DEFAULT_TEMPLATE_FILES = {
    "package.json": json.dumps(
        {"name": "osr-boilerplate-web", "version": "0.1.0", "private": True},
        indent=2,
    ),
    "src/index.ts": "export const hello = 'world';\n",
    "README.md": "# Boilerplate\n",
}


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def interaction() -> RecordingInteraction:
    return RecordingInteraction()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def template_tarball() -> bytes:
    return build_tarball(DEFAULT_TEMPLATE_FILES)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    requests_seen: list[httpx.Request],
) -> Callable[..., httpx.Client]:
    """Build an httpx client served by a handler instead of the network."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Client:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.Client(transport=httpx.MockTransport(recording_handler))

    return factory


@pytest.fixture
def github_client(
    make_client: Callable[..., httpx.Client], template_tarball: bytes
) -> httpx.Client:
    """Client answering the connectivity probe and the web template tarball."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/zen":
            return httpx.Response(200, text="Keep it logically awesome.")
        if request.url.path == TEMPLATE_TARBALL_PATH:
            return httpx.Response(200, content=template_tarball)
        return httpx.Response(404, text="Not Found")

    return make_client(handler)


@pytest.fixture
def template_tarball_path() -> str:
    """URL path the web template tarball is served from."""
    return TEMPLATE_TARBALL_PATH


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """FakeRunner factory for tests that need custom return codes."""
    return FakeRunner


@pytest.fixture
def build_archive() -> Callable[..., bytes]:
    return build_tarball


@pytest.fixture
def make_interaction() -> type[RecordingInteraction]:
    """RecordingInteraction factory for tests that script prompt answers."""
    return RecordingInteraction
