"""Self-installation of the running executable next to ``rustup``."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import Sequence, TextIO

_EXE_SUFFIX = ".exe" if os.name == "nt" else ""


class InstallError(Exception):
    """Raised when self-installation cannot proceed."""


def confirm_can_overwrite(
    destination: Path,
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Return if overwriting ``destination`` is allowed, raise otherwise."""
    argv = sys.argv if argv is None else argv
    stdin = sys.stdin if stdin is None else stdin
    stderr = sys.stderr if stderr is None else stderr

    if "-f" in argv:
        return

    if not stdin.isatty():
        raise InstallError(
            f"existing wasm-pack installation found at `{destination}`, pass `-f` to "
            "force installation over this file, otherwise aborting "
            "installation now"
        )

    print(f"info: existing wasm-pack installation found at `{destination}`", file=stderr)
    print("info: would you like to overwrite this file? [y/N]: ", end="", file=stderr)
    stderr.flush()
    try:
        line = stdin.readline()
    except OSError as exc:
        raise InstallError("failed to read stdin") from exc

    if line.startswith(("y", "Y")):
        return
    raise InstallError("aborting installation")


def do_install(
    executable: Path | None = None,
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stderr: TextIO | None = None,
) -> Path:
    """Copy ``executable`` next to ``rustup`` and return the new path."""
    rustup = shutil.which("rustup")
    if rustup is None:
        raise InstallError(
            "failed to find an installation of `rustup` in `PATH`, "
            "is rustup already installed?"
        )
    rustup_path = Path(rustup)
    installation_dir = rustup_path.parent
    if installation_dir == rustup_path:
        raise InstallError("can't install when `rustup` is at the root of the filesystem")
    destination = installation_dir / f"wasm-pack{_EXE_SUFFIX}"

    if destination.exists():
        confirm_can_overwrite(destination, argv, stdin, stderr)

    me = Path(executable) if executable is not None else Path(sys.argv[0]).resolve()
    try:
        shutil.copy(me, destination)
    except OSError as exc:
        raise InstallError(f"failed to copy executable to `{destination}`") from exc
    print(f"info: successfully installed wasm-pack to `{destination}`")
    return destination


def install(argv: Sequence[str] | None = None) -> None:
    """Run the installer, report any error, and exit with status 0."""
    try:
        do_install(argv=argv)
    except InstallError as exc:
        print(exc, file=sys.stderr)
        cause = exc.__cause__
        while cause is not None:
            print(f"Caused by: {cause}", file=sys.stderr)
            cause = cause.__cause__

    if os.name == "nt":
        print("Press enter to close this window...")
        try:
            input()
        except (EOFError, OSError):
            pass

    sys.exit(0)