"""
Remote and local skill sources for `openskill import`.

A source reference is one of:
- a local file path (.json, .yaml, .yml, .md)
- an http(s) URL to a raw file
- a GitHub repository (``owner/repo``, ``github.com/owner/repo`` or
  ``https://github.com/owner/repo``), searched for SKILL.md files
"""

import contextlib
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

import httpx

from openskill.skills.exchange import detect_format

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

OWNER_REPO_PATTERN = re.compile(r"^[A-Za-z0-9_-]+/[A-Za-z0-9_.-]+$")
GITHUB_PREFIXES = ("https://github.com/", "http://github.com/", "github.com/")


class SourceError(Exception):
    """Raised when a source cannot be read or fetched."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


@dataclass
class RemoteContent:
    """Raw content read from a source."""

    content: str
    format: str | None
    name_hint: str | None = None


@dataclass
class RemoteSkillFile:
    """A SKILL.md file found in a GitHub repository."""

    name: str
    path: str
    download_url: str


@contextlib.contextmanager
def _http_client(client: httpx.Client | None) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    with httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True) as owned:
        yield owned


def is_url(reference: str) -> bool:
    return reference.startswith(("http://", "https://"))


def is_github_repo(reference: str) -> bool:
    """
    Check whether a reference names a GitHub repository.

    ``owner/repo`` only counts when no local path of that name exists.
    """
    if reference.startswith(GITHUB_PREFIXES):
        rest = reference
        for prefix in GITHUB_PREFIXES:
            if rest.startswith(prefix):
                rest = rest[len(prefix) :]
                break
        return len([part for part in rest.split("/") if part]) >= 2

    if not OWNER_REPO_PATTERN.match(reference):
        return False
    return not Path(reference).exists()


def parse_github_source(reference: str) -> tuple[str, str]:
    """
    Split a GitHub reference into owner and repository name.

    Raises:
        SourceError: If the reference has no owner/repo part.
    """
    rest = reference
    for prefix in GITHUB_PREFIXES:
        if rest.startswith(prefix):
            rest = rest[len(prefix) :]
            break

    parts = [part for part in rest.split("/") if part]
    if len(parts) < 2:
        raise SourceError(f"Invalid GitHub repository format: {reference}", reference)

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return owner, repo


def _name_hint(reference: str) -> str | None:
    path = PurePosixPath(reference.split("?", 1)[0].split("#", 1)[0])
    if path.name.upper() == "SKILL.MD":
        return path.parent.name or None
    return path.stem or None


def fetch_url(url: str, client: httpx.Client | None = None) -> str:
    """
    Fetch a URL and return the response body.

    Raises:
        SourceError: On a network failure or a non-200 response.
    """
    try:
        with _http_client(client) as http:
            response = http.get(url)
    except httpx.TimeoutException as e:
        raise SourceError(f"Request timed out: {url}", url) from e
    except httpx.RequestError as e:
        raise SourceError(f"Failed to fetch URL: {e}", url) from e

    if response.status_code != 200:
        raise SourceError(f"HTTP error: {response.status_code} {response.reason_phrase}", url)
    return response.text


def fetch_source(
    reference: str,
    fmt: str | None = None,
    client: httpx.Client | None = None,
) -> RemoteContent:
    """
    Read a local file or fetch a URL.

    Args:
        reference: File path or http(s) URL.
        fmt: Explicit format; detected from the suffix when omitted.
        client: HTTP client to use (one is created per call if omitted).

    Returns:
        RemoteContent with the text, the resolved format (None if unknown)
        and a name derived from the path.

    Raises:
        SourceError: If the source cannot be read.
    """
    if is_url(reference):
        logger.debug(f"Fetching {reference}")
        content = fetch_url(reference, client)
    else:
        path = Path(reference).expanduser()
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceError(f"Failed to read file: {e}", reference) from e

    return RemoteContent(
        content=content,
        format=fmt or detect_format(reference),
        name_hint=_name_hint(reference),
    )


def _get_json(http: httpx.Client, url: str) -> Any:
    try:
        response = http.get(url, headers={"Accept": "application/vnd.github+json"})
    except httpx.RequestError as e:
        raise SourceError(f"Failed to fetch repository: {e}", url) from e

    if response.status_code != 200:
        raise SourceError(f"GitHub API error: {response.status_code} {response.reason_phrase}", url)

    try:
        return response.json()
    except ValueError as e:
        raise SourceError(f"Invalid response from GitHub API: {e}", url) from e


def _walk_contents(http: httpx.Client, url: str, found: list[RemoteSkillFile]) -> None:
    items = _get_json(http, url)
    if not isinstance(items, list):
        raise SourceError("Unexpected response from GitHub API", url)

    for item in items:
        item_type = item.get("type")
        item_path = item.get("path", "")

        if item_type == "file" and item.get("name", "").upper() == "SKILL.MD":
            name = PurePosixPath(item_path).parent.name or PurePosixPath(item_path).stem
            found.append(RemoteSkillFile(name=name, path=item_path, download_url=item.get("download_url", "")))
        elif item_type == "dir" and item.get("url"):
            try:
                _walk_contents(http, item["url"], found)
            except SourceError as e:
                logger.warning(f"Skipping {item_path}: {e}")


def find_skills_in_repo(owner: str, repo: str, client: httpx.Client | None = None) -> list[RemoteSkillFile]:
    """
    Find every SKILL.md in a GitHub repository.

    Walks the repository through the GitHub contents API. Subdirectories
    that cannot be listed are skipped; a failure on the repository root
    is raised.

    Raises:
        SourceError: If the repository cannot be listed.
    """
    found: list[RemoteSkillFile] = []
    with _http_client(client) as http:
        _walk_contents(http, f"{GITHUB_API_URL}/repos/{owner}/{repo}/contents", found)
    return found
