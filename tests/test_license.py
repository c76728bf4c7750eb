import io
from pathlib import Path

import pytest

from wasmpack.license import copy_from_crate, glob_license_files
from wasmpack.manifest import CrateData
from wasmpack.progressbar import ProgressOutput

FIRST_LICENSE_TEXT = """
SAMPLE PUBLIC TERMS
    Version 2

Everyone may copy and distribute verbatim or modified
copies of this document, and changing it is allowed as long
as the name is changed.

0. Do as you wish.
"""

SECOND_LICENSE_TEXT = """
Sample terms for a test fixture.

Use, change and share this fixture text in any way.
THE FIXTURE IS PROVIDED AS IS, WITH NO PROMISES OF ANY KIND.
"""


def _cargo_toml(name: str) -> str:
    return f"""
[package]
authors = ["The wasm-pack developers"]
description = "so awesome rust+wasm package"
license = "WTFPL"
name = "{name}"
repository = "https://example.com/wasm-pack.git"
version = "0.1.0"

[lib]
crate-type = ["cdylib"]

[dependencies]
wasm-bindgen = "=0.2.37"
"""


def _cargo_toml_with_license_file(name: str, license_file: str) -> str:
    return f"""
[package]
authors = ["The wasm-pack developers"]
description = "so awesome rust+wasm package"
name = "{name}"
license-file = "{license_file}"
repository = "https://example.com/wasm-pack.git"
version = "0.1.0"

[lib]
crate-type = ["cdylib"]
"""


def _fixture(root: Path, name: str, cargo_toml: str, files: dict[str, str]):
    crate = root / "wasm-pack"
    crate.mkdir()
    (crate / "README.md").write_text("# Fixture!\n", encoding="utf-8")
    (crate / "Cargo.toml").write_text(cargo_toml, encoding="utf-8")
    for file_name, text in files.items():
        (crate / file_name).write_text(text, encoding="utf-8")
    metadata = {
        "packages": [
            {
                "name": name,
                "version": "0.1.0",
                "authors": ["The wasm-pack developers"],
                "targets": [
                    {"name": name, "kind": ["cdylib"], "crate_types": ["cdylib"]}
                ],
            }
        ],
        "workspace_root": str(crate),
        "target_directory": str(crate / "target"),
    }
    crate_data = CrateData.from_metadata(crate, metadata)
    out_dir = crate / "pkg"
    out_dir.mkdir()
    return crate, out_dir, crate_data


def _same_contents(a: Path, b: Path) -> bool:
    return a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")


@pytest.mark.parametrize("run", ["default_path", "provided_path"])
def test_it_copies_a_license(tmp_path, run):
    crate, out_dir, crate_data = _fixture(
        tmp_path,
        "single_license",
        _cargo_toml("single_license"),
        {"LICENSE": "\nI'm a license!\n"},
    )
    copy_from_crate(crate_data, crate, out_dir, ProgressOutput(io.StringIO()))
    assert (crate / "LICENSE").is_file()
    assert (out_dir / "LICENSE").is_file()
    assert _same_contents(crate / "LICENSE", out_dir / "LICENSE")


@pytest.mark.parametrize("run", ["default_path", "provided_path"])
def test_it_copies_all_licenses(tmp_path, run):
    crate, out_dir, crate_data = _fixture(
        tmp_path,
        "dual_license",
        _cargo_toml("dual_license"),
        {"LICENSE-WTFPL": FIRST_LICENSE_TEXT, "LICENSE-MIT": SECOND_LICENSE_TEXT},
    )
    copy_from_crate(crate_data, crate, out_dir, ProgressOutput(io.StringIO()))
    for name in ("LICENSE-WTFPL", "LICENSE-MIT"):
        assert (out_dir / name).is_file()
        assert _same_contents(crate / name, out_dir / name)


def test_it_copies_a_non_standard_license_provided_path(tmp_path):
    license_file = "NON-STANDARD-LICENSE"
    crate, out_dir, crate_data = _fixture(
        tmp_path,
        "dual_license",
        _cargo_toml_with_license_file("dual_license", license_file),
        {license_file: "license file for test"},
    )
    copy_from_crate(crate_data, crate, out_dir, ProgressOutput(io.StringIO()))
    assert (out_dir / license_file).is_file()
    assert _same_contents(crate / license_file, out_dir / license_file)


def test_license_key_without_files_reports_info(tmp_path):
    crate, out_dir, crate_data = _fixture(
        tmp_path, "no_files", _cargo_toml("no_files"), {}
    )
    stream = io.StringIO()
    copy_from_crate(crate_data, crate, out_dir, ProgressOutput(stream))
    assert "no LICENSE file(s) were found" in stream.getvalue()
    assert list(out_dir.iterdir()) == []


def test_missing_license_file_reports_info(tmp_path):
    crate, out_dir, crate_data = _fixture(
        tmp_path,
        "missing_file",
        _cargo_toml_with_license_file("missing_file", "MISSING-LICENSE"),
        {},
    )
    stream = io.StringIO()
    copy_from_crate(crate_data, crate, out_dir, ProgressOutput(stream))
    assert "origin crate has no LICENSE" in stream.getvalue()
    assert not (out_dir / "MISSING-LICENSE").exists()


def test_glob_license_files_lists_sorted_license_names(tmp_path):
    for name in ("LICENSE-MIT", "LICENSE", "README.md", "LICENSE-APACHE"):
        (tmp_path / name).write_text("x", encoding="utf-8")
    assert glob_license_files(tmp_path) == ["LICENSE", "LICENSE-APACHE", "LICENSE-MIT"]


def test_missing_out_dir_raises(tmp_path):
    crate, out_dir, crate_data = _fixture(
        tmp_path, "single_license", _cargo_toml("single_license"), {"LICENSE": "x"}
    )
    with pytest.raises(ValueError):
        copy_from_crate(crate_data, crate, crate / "nowhere")