"""Copying a crate's license file(s) into the package directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from wasmpack.progressbar import PBAR, ProgressOutput


class _LicensedCrate(Protocol):
    def crate_license(self) -> str | None: ...

    def crate_license_file(self) -> str | None: ...


def glob_license_files(path: Path) -> list[str]:
    """Sorted names of the entries in ``path`` whose names start with LICENSE."""
    return sorted(entry.name for entry in Path(path).glob("LICENSE*"))


def _copy(source: Path, destination: Path, output: ProgressOutput) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError:
        output.info("origin crate has no LICENSE")


def copy_from_crate(
    crate_data: _LicensedCrate,
    path: Path,
    out_dir: Path,
    output: ProgressOutput | None = None,
) -> None:
    """Copy the crate's license file(s) into ``out_dir``."""
    output = output if output is not None else PBAR
    path = Path(path)
    out_dir = Path(out_dir)
    if not path.is_dir():
        raise ValueError("crate directory should exist")
    if not out_dir.is_dir():
        raise ValueError("crate's pkg directory should exist")

    license_name = crate_data.crate_license()
    license_file = crate_data.crate_license_file()

    if license_name is not None:
        try:
            files = glob_license_files(path)
        except OSError:
            output.info("origin crate has no LICENSE")
            return
        if not files:
            output.info(
                "License key is set in Cargo.toml but no LICENSE file(s) were "
                "found; Please add the LICENSE file(s) to your project directory"
            )
            return
        for name in files:
            _copy(path / name, out_dir / name, output)
    elif license_file is not None:
        _copy(path / license_file, out_dir / license_file, output)