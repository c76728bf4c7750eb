"""Per-profile settings read from ``[package.metadata.wasm-pack.profile]``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

_BINDGEN_KEYS = {
    "debug-js-glue": "debug_js_glue",
    "demangle-name-section": "demangle_name_section",
    "dwarf-debug-info": "dwarf_debug_info",
}


class BuildProfile(Enum):
    """The build profiles a crate can be compiled with."""

    DEV = "dev"
    RELEASE = "release"
    PROFILING = "profiling"


def _parse_wasm_opt(value: Any) -> bool | list[str]:
    if isinstance(value, bool):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ValueError(
        "`wasm-opt` must be a boolean or a list of strings, "
        f"got {value!r}"
    )


@dataclass
class CargoWasmPackProfile:
    """Configuration for wasm-bindgen and wasm-opt within one profile."""

    debug_js_glue: bool | None = None
    demangle_name_section: bool | None = None
    dwarf_debug_info: bool | None = None
    wasm_opt: bool | list[str] | None = None

    @classmethod
    def default_for(cls, profile: BuildProfile | str) -> CargoWasmPackProfile:
        """The built-in defaults of ``profile``."""
        profile = BuildProfile(profile)
        if profile is BuildProfile.DEV:
            return cls(
                debug_js_glue=True,
                demangle_name_section=True,
                dwarf_debug_info=False,
                wasm_opt=None,
            )
        return cls(
            debug_js_glue=False,
            demangle_name_section=True,
            dwarf_debug_info=False,
            wasm_opt=True,
        )

    @classmethod
    def from_table(
        cls, table: Mapping[str, Any] | None, profile: BuildProfile | str
    ) -> CargoWasmPackProfile:
        """Read a profile table and fill what it leaves out from the defaults."""
        result = cls()
        if table is not None:
            if not isinstance(table, Mapping):
                raise ValueError(f"profile table must be a table, got {table!r}")
            bindgen = table.get("wasm-bindgen", {})
            if not isinstance(bindgen, Mapping):
                raise ValueError(
                    f"`wasm-bindgen` must be a table, got {bindgen!r}"
                )
            for key, attribute in _BINDGEN_KEYS.items():
                if key not in bindgen:
                    continue
                value = bindgen[key]
                if not isinstance(value, bool):
                    raise ValueError(f"`{key}` must be a boolean, got {value!r}")
                setattr(result, attribute, value)
            if "wasm-opt" in table:
                result.wasm_opt = _parse_wasm_opt(table["wasm-opt"])
        result.update_with_defaults(cls.default_for(profile))
        return result

    def update_with_defaults(self, defaults: CargoWasmPackProfile) -> None:
        """Fill every unset setting from ``defaults``."""
        for attribute in _BINDGEN_KEYS.values():
            if getattr(self, attribute) is None:
                setattr(self, attribute, getattr(defaults, attribute))
        if self.wasm_opt is None:
            default = defaults.wasm_opt
            self.wasm_opt = list(default) if isinstance(default, list) else default

    def wasm_opt_args(self) -> list[str] | None:
        """Arguments for ``wasm-opt``, or None when it is disabled."""
        if self.wasm_opt is None or self.wasm_opt is False:
            return None
        if self.wasm_opt is True:
            return ["-O"]
        return list(self.wasm_opt)


def parse_profiles(
    table: Mapping[str, Any] | None,
) -> dict[BuildProfile, CargoWasmPackProfile]:
    """Read the ``profile`` table into a profile for each build profile."""
    if table is not None and not isinstance(table, Mapping):
        raise ValueError(f"`profile` must be a table, got {table!r}")
    table = table or {}
    return {
        profile: CargoWasmPackProfile.from_table(table.get(profile.value), profile)
        for profile in BuildProfile
    }