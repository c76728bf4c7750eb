# wasmpack

Helpers for packaging a Rust crate that has been compiled to WebAssembly as
an npm package. The package reads a crate's `Cargo.toml` (through
`cargo metadata`) and `Cargo.lock`, writes a matching `package.json`, copies
the crate's README and license files into the output directory, and can run
`npm pack`, `npm publish` and `npm login`.

## Installation

```
pip install wasmpack
```

Python 3.11 or later is required. There are no third-party dependencies.
Reading a crate with `CrateData.new` needs `cargo` on `PATH`; the npm
functions need `npm`.

## Self-installation

```
wasm-pack-init
```

looks up `rustup` on `PATH` and copies the running program into the same
directory as `wasm-pack` (`wasm-pack.exe` on Windows). If that file already
exists it asks on the terminal before overwriting it; pass `-f` to overwrite
without asking. When standard input is not a terminal and `-f` was not given,
it refuses. Errors are printed to standard error; the command always exits
with status 0, and on Windows it waits for Enter before closing.

## Library use

Read a crate and write its `package.json`:

```python
from pathlib import Path

from wasmpack import license, readme
from wasmpack.manifest import CrateData, Target
from wasmpack.progressbar import ProgressOutput

crate_dir = Path("my-crate")
out_dir = crate_dir / "pkg"
out_dir.mkdir(exist_ok=True)

output = ProgressOutput()
crate = CrateData.new(crate_dir, None)
crate.check_crate_config()          # raises unless a cdylib target exists
crate.write_package_json(out_dir, None, False, Target.BUNDLER)

readme.copy_from_crate(crate_dir, out_dir, output)
license.copy_from_crate(crate, crate_dir, out_dir, output)
```

`Target.NODEJS` produces a package with a `main` entry and the extra
`_bg.js` file, `Target.NO_MODULES` a `browser` entry, and `Target.BUNDLER`
and `Target.WEB` a `module` entry with `"sideEffects": false`.
`CrateData.npm_package` returns the package object without writing it, and
`CrateData.from_metadata` accepts `cargo metadata` output you already have.
Unknown keys under `[package.metadata.wasm-pack]` are reported as warnings.

Per-profile settings from `[package.metadata.wasm-pack.profile]` are
available through `CrateData.configured_profile(BuildProfile.RELEASE)`, which
returns a `CargoWasmPackProfile` with unset values filled from the profile's
defaults. Its `wasm_opt_args()` returns `["-O"]` when `wasm-opt = true`, the
given list when `wasm-opt` is a list, and `None` when it is disabled.

The `wasm-bindgen` version a crate is locked to:

```python
from wasmpack.lockfile import Lockfile

lock = Lockfile.from_crate(crate)
print(lock.require_wasm_bindgen())
```

A small JSON key-value store in a `.stamps` file next to the running program
(or at a path you pass):

```python
from wasmpack import stamps

stamps.save_stamp_value("chromedriver_version", "76.0.3809.126", None)
data = stamps.read_stamps_file_to_json(None)
print(stamps.get_stamp_value("chromedriver_version", data))
```

Checking for a newer release on crates.io, at most once every 24 hours; the
result of the last check is kept in a `.stamp` file:

```python
from wasmpack.version_check import check_for_updates

newer = check_for_updates("0.8.1")
if newer is not None:
    print(f"{newer.latest} is available, you are using {newer.local}")
```

Publishing goes through the `npm` command line tool:

```python
from wasmpack import npm

npm.npm_pack("pkg")
npm.npm_publish("pkg", None, None)
npm.npm_login("https://registry.npmjs.org/", None, False, None)
```

`wasmpack.target` reports the current operating system and architecture, and
`ProgressOutput` prints `[INFO]`, `[WARN]` and `[ERR]` messages to standard
error.

Errors are raised as exceptions: `ManifestError`, `LockfileError`,
`StampError`, `NpmError`, `InstallError` and `VersionCheckError`.

## What this package does not do

There is no command for building, testing or publishing a crate. The package
does not run `cargo build`, `wasm-bindgen` or `wasm-opt`, does not download
tools or browser drivers, and does not run tests in Node or a browser; it
only provides the manifest, packaging and npm steps described above.

## Running the tests

```
pip install -e ".[test]"
pytest
```