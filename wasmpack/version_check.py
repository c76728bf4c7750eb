"""Checking whether a newer release is available, at most once a day."""

from __future__ import annotations

import json
import sys
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

CRATES_API_URL = "https://crates.io/api/v1/crates/wasm-pack"
STAMP_TTL_HOURS = 24
_USER_AGENT = "wasm-pack"


class VersionCheckError(Exception):
    """Raised when the latest version cannot be determined."""


@dataclass(frozen=True)
class WasmPackVersion:
    """The running version and the latest published one."""

    local: str
    latest: str


def _default_stamp_path() -> Path:
    return Path(sys.argv[0] or "wasm-pack").resolve().with_suffix(".stamp")


def stamp_file_value(contents: str, word: str) -> str | None:
    """Value of the first line starting with ``word`` in a stamp file."""
    for line in contents.splitlines():
        if line.startswith(word):
            parts = line.split()
            return parts[1] if len(parts) > 1 else None
    return None


def write_stamp_file(path: Path, current_time: datetime, version: str | None) -> None:
    """Replace the stamp file with the check time and, if known, the version."""
    text = f"created {current_time.isoformat()}"
    if version is not None:
        text += f"\nversion {version}"
    Path(path).write_text(text, encoding="utf-8")


def fetch_latest_version(url: str = CRATES_API_URL) -> str:
    """Ask the registry API for the newest published version."""
    request = urllib.request.Request(
        url, headers={"User-Agent": _USER_AGENT}, method="GET"
    )
    try:
        with urllib.request.urlopen(request) as response:
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise VersionCheckError(
            f"Received a bad HTTP status code ({exc.code}) when checking for "
            f"newer wasm-pack version at: {url}"
        ) from exc
    except (urllib.error.URLError, OSError) as exc:
        raise VersionCheckError(f"failed to reach {url}: {exc}") from exc
    try:
        document = json.loads(body.decode("utf-8", errors="replace"))
        version = document["crate"]["max_version"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise VersionCheckError(f"unexpected response from {url}") from exc
    if not isinstance(version, str):
        raise VersionCheckError(f"unexpected response from {url}")
    return version


def _parse_time(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else None


def _write_quietly(path: Path, current_time: datetime, version: str | None) -> None:
    try:
        write_stamp_file(path, current_time, version)
    except OSError:
        pass


def _refresh(path: Path, fetch: Callable[[], str], now: datetime) -> str:
    # The stamp is rewritten even on failure so the API is not hit on every run.
    try:
        version = fetch()
    except Exception:
        _write_quietly(path, now, None)
        raise
    _write_quietly(path, now, version)
    return version


def latest_version(
    stamp_path: Path | None = None,
    fetch: Callable[[], str] | None = None,
    now: datetime | None = None,
) -> str | None:
    """Latest version, from the stamp file when it is recent, else fetched."""
    path = Path(stamp_path) if stamp_path is not None else _default_stamp_path()
    fetch = fetch if fetch is not None else fetch_latest_version
    now = now if now is not None else datetime.now().astimezone()

    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return _refresh(path, fetch, now)

    created = _parse_time(stamp_file_value(contents, "created"))
    if created is None:
        return None
    if int((now - created) / timedelta(hours=1)) > STAMP_TTL_HOURS:
        return _refresh(path, fetch, now)
    return stamp_file_value(contents, "version")


def check_for_updates(
    local_version: str,
    stamp_path: Path | None = None,
    fetch: Callable[[], str] | None = None,
) -> WasmPackVersion | None:
    """Return both versions when a different release is available, else None."""
    latest = latest_version(stamp_path, fetch) or ""
    if local_version and latest and local_version != latest:
        return WasmPackVersion(local=local_version, latest=latest)
    return None