"""Copying a crate's README into the package directory."""

from __future__ import annotations

import shutil
from pathlib import Path

from wasmpack.progressbar import PBAR, ProgressOutput


def copy_from_crate(
    path: Path, out_dir: Path, output: ProgressOutput | None = None
) -> None:
    """Copy ``README.md`` from the crate directory into ``out_dir``."""
    output = output if output is not None else PBAR
    path = Path(path)
    out_dir = Path(out_dir)
    if not path.is_dir():
        raise ValueError("crate directory should exist")
    if not out_dir.is_dir():
        raise ValueError("crate's pkg directory should exist")

    crate_readme = path / "README.md"
    if crate_readme.exists():
        try:
            shutil.copyfile(crate_readme, out_dir / "README.md")
        except OSError as exc:
            raise OSError(f"failed to copy README: {exc}") from exc
    else:
        output.warn("origin crate has no README")