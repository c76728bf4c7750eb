"""Packaging helpers for Rust crates compiled to WebAssembly: manifests, lock files, package.json, licenses, READMEs, npm and version stamps."""

__version__ = "0.8.1"