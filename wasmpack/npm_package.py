"""The shapes of the generated ``package.json`` for each output target."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(kw_only=True)
class Repository:
    ty: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.ty, "url": self.url}


def _serialize(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if value is None or (isinstance(value, list) and not value):
            continue
        result[key] = value.to_dict() if isinstance(value, Repository) else value
    return result


@dataclass(kw_only=True)
class CommonJSPackage:
    name: str
    version: str
    main: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name),
            ("collaborators", list(self.collaborators)),
            ("description", self.description),
            ("version", self.version),
            ("license", self.license),
            ("repository", self.repository),
            ("files", list(self.files)),
            ("main", self.main),
            ("homepage", self.homepage),
            ("types", self.types),
        ])


@dataclass(kw_only=True)
class ESModulesPackage:
    name: str
    version: str
    module: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None
    side_effects: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name),
            ("collaborators", list(self.collaborators)),
            ("description", self.description),
            ("version", self.version),
            ("license", self.license),
            ("repository", self.repository),
            ("files", list(self.files)),
            ("module", self.module),
            ("homepage", self.homepage),
            ("types", self.types),
            ("sideEffects", self.side_effects),
        ])


@dataclass(kw_only=True)
class NoModulesPackage:
    name: str
    version: str
    browser: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name),
            ("collaborators", list(self.collaborators)),
            ("description", self.description),
            ("version", self.version),
            ("license", self.license),
            ("repository", self.repository),
            ("files", list(self.files)),
            ("browser", self.browser),
            ("homepage", self.homepage),
            ("types", self.types),
        ])


NpmPackage = CommonJSPackage | ESModulesPackage | NoModulesPackage


def to_json(package: NpmPackage) -> str:
    """Pretty-printed JSON text of a package manifest."""
    return json.dumps(package.to_dict(), indent=2, ensure_ascii=False)