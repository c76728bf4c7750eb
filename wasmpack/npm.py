"""Running ``npm`` to pack, publish and log in."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class NpmError(Exception):
    """Raised when an ``npm`` command fails."""


def _npm() -> list[str]:
    return ["cmd", "/c", "npm"] if os.name == "nt" else ["npm"]


def _run(args: list[str], cwd: str | Path, name: str, context: str) -> None:
    cmd = [*_npm(), *args]
    logger.info("Running %s", cmd)
    try:
        result = subprocess.run(cmd, cwd=cwd)
    except OSError as exc:
        raise NpmError(context) from NpmError(f"failed to execute `{name}`: {exc}")
    if result.returncode != 0:
        raise NpmError(context) from NpmError(
            f"failed to execute `{name}`: exited with exit status {result.returncode}"
        )


def npm_pack(path: str | Path) -> None:
    """Run ``npm pack`` in ``path``."""
    _run(["pack"], path, "npm pack", "Packaging up your code failed")


def npm_publish(path: str | Path, access: Any = None, tag: str | None = None) -> None:
    """Run ``npm publish`` in ``path`` with optional access and tag."""
    args = ["publish"]
    if access is not None:
        args.append(str(access))
    if tag is not None:
        args.extend(["--tag", str(tag)])
    _run(args, path, "npm publish", "Publishing to npm failed")


def login_args(
    registry: str,
    scope: str | None = None,
    always_auth: bool = False,
    auth_type: str | None = None,
) -> list[str]:
    """Arguments for ``npm login``."""
    args = ["login", f"--registry={registry}"]
    if scope is not None:
        args.append(f"--scope={scope}")
    if always_auth:
        args.append("--always_auth")
    if auth_type is not None:
        args.append(f"--auth_type={auth_type}")
    return args


def npm_login(
    registry: str,
    scope: str | None = None,
    always_auth: bool = False,
    auth_type: str | None = None,
) -> None:
    """Run ``npm login`` interactively."""
    cmd = [*_npm(), *login_args(registry, scope, always_auth, auth_type)]
    logger.info("Running %s", cmd)
    result = subprocess.run(cmd)
    if result.returncode != 0:
        raise NpmError(f"Login to registry {registry} failed")