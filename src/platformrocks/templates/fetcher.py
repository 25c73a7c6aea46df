"""Download template repositories as tarballs and unpack them."""

from __future__ import annotations

import io
import logging
import tarfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import httpx

from platformrocks.directory import ensure_directory
from platformrocks.errors import DownloadError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "github"
DEFAULT_REF = "main"
DOWNLOAD_TIMEOUT = 60.0

TARBALL_URLS: dict[str, str] = {
    "github": "https://api.github.com/repos/{repo}/tarball/{ref}",
    "gitlab": "https://gitlab.com/{repo}/-/archive/{ref}.tar.gz",
    "bitbucket": "https://bitbucket.org/{repo}/get/{ref}.tar.gz",
}


@dataclass(frozen=True)
class TemplateSource:
    """A parsed ``provider:owner/name[/subdir][#ref]`` identifier."""

    provider: str
    repo: str
    subdir: str = ""
    ref: str = DEFAULT_REF

    @classmethod
    def parse(cls, identifier: str) -> TemplateSource:
        """Parse a template identifier.

        A missing provider means github, a missing ref means ``main``.
        """
        provider, sep, rest = identifier.partition(":")
        if not sep:
            provider, rest = DEFAULT_PROVIDER, identifier
        if provider not in TARBALL_URLS:
            supported = ", ".join(TARBALL_URLS)
            raise ValidationError(
                f"Unsupported template provider: {provider}. Supported: {supported}"
            )

        path, _, ref = rest.partition("#")
        parts = [part for part in path.split("/") if part]
        if len(parts) < 2:
            raise ValidationError(f"Invalid template source: {identifier}")

        return cls(
            provider=provider,
            repo="/".join(parts[:2]),
            subdir="/".join(parts[2:]),
            ref=ref or DEFAULT_REF,
        )

    @property
    def tarball_url(self) -> str:
        return TARBALL_URLS[self.provider].format(repo=self.repo, ref=self.ref)


def _strip_path(name: str, prefix: tuple[str, ...]) -> str | None:
    """Drop the archive's top-level directory and ``prefix`` from ``name``.

    Returns None for entries outside ``prefix`` or the prefix itself.
    """
    parts = PurePosixPath(name).parts[1:]
    if parts[: len(prefix)] != prefix:
        return None
    parts = parts[len(prefix) :]
    if not parts:
        return None
    return str(PurePosixPath(*parts))


def extract_archive(data: bytes, destination: Path, subdir: str = "") -> int:
    """Unpack a gzipped tarball into ``destination``.

    Existing files are overwritten. Returns the number of entries written.
    """
    prefix = PurePosixPath(subdir).parts if subdir else ()
    written = 0
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
        for member in archive.getmembers():
            name = _strip_path(member.name, prefix)
            if name is None:
                continue
            if member.islnk():
                linkname = _strip_path(member.linkname, prefix)
                if linkname is None:
                    continue
                member.linkname = linkname
            member.name = name
            archive.extract(member, destination, filter="data")
            written += 1
    return written


class TemplateFetcher:
    """Materializes a remote template into a local directory.

    Every fetch goes to the network; nothing is cached between runs.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        auth_token: str | None = None,
        timeout: float = DOWNLOAD_TIMEOUT,
    ) -> None:
        self._client = client
        self._auth_token = auth_token
        self._timeout = timeout

    def fetch(self, source: str, destination: Path) -> Path:
        """Download ``source`` and extract it into ``destination``.

        Raises DownloadError for HTTP failures and unreadable archives.
        """
        parsed = TemplateSource.parse(source)
        data = self._download(parsed, source)

        ensure_directory(destination)
        try:
            written = extract_archive(data, destination, parsed.subdir)
        except (tarfile.TarError, EOFError) as e:
            raise DownloadError(f"Failed to extract template from {source}: {e}") from e

        if written == 0:
            where = f" (subdirectory {parsed.subdir!r})" if parsed.subdir else ""
            raise DownloadError(f"Template archive from {source}{where} is empty")

        logger.debug("Extracted %d entries from %s into %s", written, source, destination)
        return destination

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": "platformrocks"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    def _download(self, parsed: TemplateSource, source: str) -> bytes:
        url = parsed.tarball_url
        logger.debug("Downloading %s", url)
        if self._client is not None:
            return self._get(self._client, url, source)
        with httpx.Client() as client:
            return self._get(client, url, source)

    def _get(self, client: httpx.Client, url: str, source: str) -> bytes:
        try:
            response = client.get(
                url,
                headers=self._headers(),
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DownloadError(f"Failed to download template from {source}: {e}") from e
        return response.content
