"""Reading ``Cargo.toml`` and writing the generated ``package.json``."""

from __future__ import annotations

import json
import subprocess
import tomllib
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from wasmpack.npm_package import (
    CommonJSPackage,
    ESModulesPackage,
    NoModulesPackage,
    NpmPackage,
    Repository,
    to_json,
)
from wasmpack.profile import BuildProfile, CargoWasmPackProfile, parse_profiles
from wasmpack.progressbar import PBAR, ProgressOutput

WASM_PACK_METADATA_KEY = "package.metadata.wasm-pack"
_LEVENSHTEIN_THRESHOLD = 1

_PROFILE_SCHEMA: dict[str, Any] = {
    "wasm-bindgen": {
        "debug-js-glue": None,
        "demangle-name-section": None,
        "dwarf-debug-info": None,
    },
    "wasm-opt": None,
}

_MANIFEST_SCHEMA: dict[str, Any] = {
    "package": {
        "name": None,
        "description": None,
        "license": None,
        "license-file": None,
        "repository": None,
        "homepage": None,
        "metadata": {
            "wasm-pack": {
                "profile": {
                    "dev": _PROFILE_SCHEMA,
                    "release": _PROFILE_SCHEMA,
                    "profiling": _PROFILE_SCHEMA,
                }
            }
        },
    }
}


class Target(Enum):
    """The kinds of JavaScript output that can be generated."""

    BUNDLER = "bundler"
    NODEJS = "nodejs"
    WEB = "web"
    NO_MODULES = "no-modules"


class ManifestError(Exception):
    """Raised when a crate's manifest or metadata is missing or invalid."""


@dataclass
class CargoPackage:
    """The parts of ``[package]`` this tool uses."""

    name: str
    description: str | None = None
    license: str | None = None
    license_file: str | None = None
    repository: str | None = None
    homepage: str | None = None
    profiles: dict[BuildProfile, CargoWasmPackProfile] = field(
        default_factory=lambda: parse_profiles(None)
    )


@dataclass
class ManifestAndUnusedKeys:
    """A parsed manifest and the sorted wasm-pack keys it does not understand."""

    manifest: CargoPackage
    unused_keys: list[str]


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def _ignored_paths(
    table: Mapping[str, Any], schema: Mapping[str, Any], prefix: str = ""
) -> Iterator[str]:
    for key, value in table.items():
        path = f"{prefix}.{key}" if prefix else key
        if key not in schema:
            yield path
            continue
        sub_schema = schema[key]
        if sub_schema is not None and isinstance(value, Mapping):
            yield from _ignored_paths(value, sub_schema, path)


def _is_reported(path: str) -> bool:
    return path.startswith("package.metadata") and (
        "wasm-pack" in path
        or levenshtein(WASM_PACK_METADATA_KEY, path) <= _LEVENSHTEIN_THRESHOLD
    )


def _optional_str(package: Mapping[str, Any], key: str) -> str | None:
    value = package.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"`{key}` must be a string, got {value!r}")
    return value


def _table(parent: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = parent.get(key)
    if value is not None and not isinstance(value, Mapping):
        raise ValueError(f"`{key}` must be a table, got {value!r}")
    return value


def _package_from_document(document: Mapping[str, Any]) -> CargoPackage:
    package = _table(document, "package")
    if package is None:
        raise ValueError("missing field `package`")
    name = package.get("name")
    if not isinstance(name, str):
        raise ValueError("missing field `name`")
    metadata = _table(package, "metadata") or {}
    wasm_pack = _table(metadata, "wasm-pack") or {}
    return CargoPackage(
        name=name,
        description=_optional_str(package, "description"),
        license=_optional_str(package, "license"),
        license_file=_optional_str(package, "license-file"),
        repository=_optional_str(package, "repository"),
        homepage=_optional_str(package, "homepage"),
        profiles=parse_profiles(_table(wasm_pack, "profile")),
    )


def parse_crate_data(manifest_path: Path) -> ManifestAndUnusedKeys:
    """Read ``manifest_path`` and collect the wasm-pack keys it leaves unused."""
    manifest_path = Path(manifest_path)
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"failed to read: {manifest_path}") from exc
    try:
        document = tomllib.loads(text)
        manifest = _package_from_document(document)
    except (tomllib.TOMLDecodeError, ValueError) as exc:
        raise ManifestError(f"failed to parse manifest: {manifest_path}") from exc
    unused = {
        path for path in _ignored_paths(document, _MANIFEST_SCHEMA) if _is_reported(path)
    }
    return ManifestAndUnusedKeys(manifest=manifest, unused_keys=sorted(unused))


def warn_for_unused_keys(
    manifest_and_keys: ManifestAndUnusedKeys, output: ProgressOutput | None = None
) -> None:
    """Print a warning for each unknown key."""
    output = output if output is not None else PBAR
    for path in manifest_and_keys.unused_keys:
        output.warn(
            f'"{path}" is an unknown key and will be ignored. '
            "Please check your Cargo.toml."
        )


def _manifest_path(crate_path: Path) -> Path:
    manifest_path = Path(crate_path) / "Cargo.toml"
    if not manifest_path.is_file():
        raise ManifestError(
            "crate directory is missing a `Cargo.toml` file; is "
            f"`{crate_path}` the wrong directory?"
        )
    return manifest_path


def _run_cargo_metadata(manifest_path: Path) -> dict[str, Any]:
    cmd = [
        "cargo",
        "metadata",
        "--format-version",
        "1",
        "--manifest-path",
        str(manifest_path),
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise ManifestError(f"failed to execute `cargo metadata`: {exc}") from exc
    if result.returncode != 0:
        raise ManifestError(
            f"`cargo metadata` exited with status {result.returncode}: "
            f"{result.stderr.strip()}"
        )
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise ManifestError("`cargo metadata` produced invalid JSON") from exc


@dataclass
class _NpmData:
    name: str
    files: list[str]
    dts_file: str | None
    main: str
    homepage: str | None


class CrateData:
    """Everything learned about a crate from its manifest and cargo metadata."""

    def __init__(
        self,
        data: Mapping[str, Any],
        current_idx: int,
        manifest: CargoPackage,
        out_name: str | None = None,
    ) -> None:
        self.data = data
        self.current_idx = current_idx
        self.manifest = manifest
        self.out_name = out_name

    @classmethod
    def new(cls, crate_path: Path, out_name: str | None = None) -> CrateData:
        """Read all metadata of the crate in ``crate_path`` using cargo."""
        manifest_path = _manifest_path(Path(crate_path))
        metadata = _run_cargo_metadata(manifest_path)
        return cls.from_metadata(crate_path, metadata, out_name)

    @classmethod
    def from_metadata(
        cls,
        crate_path: Path,
        metadata: Mapping[str, Any],
        out_name: str | None = None,
    ) -> CrateData:
        """Build crate data from already obtained ``cargo metadata`` output."""
        manifest_path = _manifest_path(Path(crate_path))
        manifest_and_keys = parse_crate_data(manifest_path)
        warn_for_unused_keys(manifest_and_keys)
        manifest = manifest_and_keys.manifest
        index = next(
            (
                i
                for i, pkg in enumerate(metadata.get("packages", []))
                if pkg.get("name") == manifest.name
            ),
            None,
        )
        if index is None:
            raise ManifestError("failed to find package in metadata")
        return cls(metadata, index, manifest, out_name)

    @property
    def _package(self) -> Mapping[str, Any]:
        return self.data["packages"][self.current_idx]

    def configured_profile(self, profile: BuildProfile | str) -> CargoWasmPackProfile:
        """The configured settings of ``profile``."""
        return self.manifest.profiles[BuildProfile(profile)]

    def check_crate_config(self) -> None:
        """Raise if the crate is not configured to build as a cdylib."""
        any_cdylib = any(
            "cdylib" in target.get("kind", []) and "cdylib" in target.get("crate_types", [])
            for target in self._package.get("targets", [])
        )
        if not any_cdylib:
            raise ManifestError(
                "crate-type must be cdylib to compile to wasm32-unknown-unknown. "
                "Add the following to your Cargo.toml file:\n\n"
                "[lib]\n"
                'crate-type = ["cdylib", "rlib"]'
            )

    def crate_name(self) -> str:
        """Name of the crate's library, with dashes turned into underscores."""
        pkg = self._package
        lib = next(
            (t for t in pkg.get("targets", []) if "cdylib" in t.get("kind", [])),
            None,
        )
        name = lib["name"] if lib is not None else pkg["name"]
        return name.replace("-", "_")

    def name_prefix(self) -> str:
        """Prefix of the output file names."""
        return self.out_name if self.out_name is not None else self.crate_name()

    def crate_license(self) -> str | None:
        return self.manifest.license

    def crate_license_file(self) -> str | None:
        return self.manifest.license_file

    def target_directory(self) -> Path:
        """Directory where cargo places build artifacts."""
        return Path(self.data["target_directory"])

    def workspace_root(self) -> Path:
        """Root directory of the crate's cargo workspace."""
        return Path(self.data["workspace_root"])

    def _npm_data(
        self,
        scope: str | None,
        include_commonjs_shim: bool,
        disable_dts: bool,
        out_dir: Path,
    ) -> _NpmData:
        prefix = self.name_prefix()
        js_file = f"{prefix}.js"
        files = [f"{prefix}_bg.wasm", js_file]
        if include_commonjs_shim:
            files.append(f"{prefix}_bg.js")

        pkg_name = self._package["name"]
        npm_name = f"@{scope}/{pkg_name}" if scope is not None else pkg_name

        dts_file = None
        if not disable_dts:
            dts_file = f"{prefix}.d.ts"
            files.append(dts_file)

        try:
            entries = sorted(Path(out_dir).iterdir())
        except OSError:
            entries = []
        files.extend(
            entry.name
            for entry in entries
            if entry.is_file()
            and entry.name.startswith("LICENSE")
            and entry.name != "LICENSE"
        )

        return _NpmData(
            name=npm_name,
            files=files,
            dts_file=dts_file,
            main=js_file,
            homepage=self.manifest.homepage,
        )

    def _license(self) -> str | None:
        if self.manifest.license is not None:
            return self.manifest.license
        if self.manifest.license_file is not None:
            return f"SEE LICENSE IN {self.manifest.license_file}"
        return None

    def _repository(self) -> Repository | None:
        if self.manifest.repository is None:
            return None
        return Repository(ty="git", url=self.manifest.repository)

    def _check_optional_fields(self) -> None:
        missing = []
        if self.manifest.description is None:
            missing.append("description")
        if self.manifest.repository is None:
            missing.append("repository")
        if self.manifest.license is None and self.manifest.license_file is None:
            missing.append("license")
        if len(missing) == 1:
            PBAR.info(
                f"Optional field missing from Cargo.toml: '{missing[0]}'. "
                "This is not necessary, but recommended"
            )
        elif len(missing) == 2:
            PBAR.info(
                f"Optional fields missing from Cargo.toml: '{missing[0]}', "
                f"'{missing[1]}'. These are not necessary, but recommended"
            )
        elif len(missing) == 3:
            PBAR.info(
                f"Optional fields missing from Cargo.toml: '{missing[0]}', "
                f"'{missing[1]}', and '{missing[2]}'. "
                "These are not necessary, but recommended"
            )

    def npm_package(
        self,
        out_dir: Path,
        scope: str | None = None,
        disable_dts: bool = False,
        target: Target | str = Target.BUNDLER,
    ) -> NpmPackage:
        """The ``package.json`` contents for ``target``."""
        target = Target(target)
        data = self._npm_data(scope, target is Target.NODEJS, disable_dts, Path(out_dir))
        pkg = self._package
        self._check_optional_fields()
        common: dict[str, Any] = {
            "name": data.name,
            "collaborators": list(pkg.get("authors", [])),
            "description": self.manifest.description,
            "version": str(pkg["version"]),
            "license": self._license(),
            "repository": self._repository(),
            "files": data.files,
            "homepage": data.homepage,
            "types": data.dts_file,
        }
        if target is Target.NODEJS:
            return CommonJSPackage(main=data.main, **common)
        if target is Target.NO_MODULES:
            return NoModulesPackage(browser=data.main, **common)
        return ESModulesPackage(module=data.main, side_effects=False, **common)

    def write_package_json(
        self,
        out_dir: Path,
        scope: str | None = None,
        disable_dts: bool = False,
        target: Target | str = Target.BUNDLER,
    ) -> None:
        """Write ``package.json`` into ``out_dir``."""
        pkg_file_path = Path(out_dir) / "package.json"
        package = self.npm_package(out_dir, scope, disable_dts, target)
        try:
            pkg_file_path.write_text(to_json(package), encoding="utf-8")
        except OSError as exc:
            raise ManifestError(f"failed to write: {pkg_file_path}") from exc