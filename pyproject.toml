[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmpack"
version = "0.8.1"
description = "Packaging helpers for Rust crates compiled to WebAssembly: Cargo manifests and lock files, npm package.json generation, license and README copying, npm commands and version stamps."
requires-python = ">=3.11"
dependencies = []
keywords = ["wasm", "webassembly", "npm", "cargo", "packaging", "build"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wasm-pack-init = "wasmpack.installer:install"

[tool.hatch.build.targets.wheel]
packages = ["wasmpack"]

[tool.pytest.ini_options]
addopts = "-ra"
