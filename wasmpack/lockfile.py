"""Reading the ``Cargo.lock`` lock file of a crate's workspace."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol


class LockfileError(Exception):
    """Raised when the lock file is missing, unreadable or malformed."""


class _HasWorkspaceRoot(Protocol):
    def workspace_root(self) -> Path: ...


@dataclass(frozen=True)
class _Package:
    name: str
    version: str


def _packages_from_document(document: Mapping[str, Any]) -> list[_Package]:
    entries = document.get("package")
    if entries is None:
        raise ValueError("missing field `package`")
    if not isinstance(entries, list):
        raise ValueError("`package` must be an array of tables")
    packages = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ValueError("`package` entries must be tables")
        name = entry.get("name")
        version = entry.get("version")
        if not isinstance(name, str):
            raise ValueError("missing field `name`")
        if not isinstance(version, str):
            raise ValueError("missing field `version`")
        packages.append(_Package(name=name, version=version))
    return packages


def _lockfile_path(crate_data: _HasWorkspaceRoot) -> Path:
    path = Path(crate_data.workspace_root()) / "Cargo.lock"
    if not path.is_file():
        raise LockfileError(f'Could not find lockfile at "{path}"')
    return path


@dataclass
class Lockfile:
    """The package entries of a ``Cargo.lock`` file."""

    packages: list[_Package] = field(default_factory=list)

    @classmethod
    def from_crate(cls, crate_data: _HasWorkspaceRoot) -> Lockfile:
        """Read the lock file at the root of the crate's workspace."""
        path = _lockfile_path(crate_data)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LockfileError(f"failed to read: {path}") from exc
        try:
            return cls.parse(text)
        except LockfileError as exc:
            raise LockfileError(f"failed to parse: {path}") from exc

    @classmethod
    def parse(cls, text: str) -> Lockfile:
        """Parse the text of a lock file."""
        try:
            document = tomllib.loads(text)
            return cls(packages=_packages_from_document(document))
        except (tomllib.TOMLDecodeError, ValueError) as exc:
            raise LockfileError(str(exc)) from exc

    def _package_version(self, name: str) -> str | None:
        return next((p.version for p in self.packages if p.name == name), None)

    def wasm_bindgen_version(self) -> str | None:
        """Version of the ``wasm-bindgen`` dependency, if present."""
        return self._package_version("wasm-bindgen")

    def require_wasm_bindgen(self) -> str:
        """Version of ``wasm-bindgen``; raise if the crate does not use it."""
        version = self.wasm_bindgen_version()
        if version is None:
            raise LockfileError(
                'Ensure that you have "wasm-bindgen" as a dependency in your '
                "Cargo.toml file:\n"
                "[dependencies]\n"
                'wasm-bindgen = "0.2"'
            )
        return version

    def wasm_bindgen_test_version(self) -> str | None:
        """Version of the ``wasm-bindgen-test`` dependency, if present."""
        return self._package_version("wasm-bindgen-test")