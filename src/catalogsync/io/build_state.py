"""Build state JSON I/O.

The host build hands its observations to catalogsync as one JSON document:

{
  "dependencies": [
    {"group": "com.squareup.okhttp3", "name": "okhttp", "version": "4.9.3", "alias": "okhttp"}
  ],
  "plugins": [
    {"group": "com.foo.bar", "name": "com.foo.bar.gradle.plugin", "version": "1.2.3"}
  ],
  "versions": {"version.okhttp3": "4.9.3"},
  "version_keys": {"com.squareup.okhttp3:okhttp": "version.okhttp3"},
  "with_versions": true,
  "gradle_version": "7.4.2",
  "features": {"versions_catalog": true}
}

Rules:
- top-level must be a JSON object; every field is optional
- if an array/object field is present it must not be null
- `dependencies[*].alias` is required (caller-assigned display name)
- `group` and `version` may be null/absent; `name` is required
- dependencies keep file order (it is the output order of `[libraries]`)
- writer is stable: UTF-8, `indent=2`, `sort_keys=True`, newline-terminated
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from catalogsync.core.config import CatalogConfig, FeatureFlags
from catalogsync.core.model import ModuleId


_MISSING = object()


def _require_dict(value: Any, *, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{where}: expected JSON object, got {type(value).__name__}")
    return value


def _require_list(value: Any, *, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{where}: expected JSON array, got {type(value).__name__}")
    return value


def _require_bool(value: Any, *, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where}: expected bool, got {type(value).__name__}")
    return value


def _norm_str(value: Any, *, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


def _opt_str(value: Any, *, where: str) -> str | None:
    if value is None:
        return None
    return _norm_str(value, where=where)


def _get(data: dict[str, Any], key: str, default: Any) -> Any:
    """Return value for key; `default` if key missing; error if explicitly null."""
    v = data.get(key, _MISSING)
    if v is _MISSING:
        return default
    if v is None:
        raise ValueError(f"{key}: must not be null")
    return v


def _str_table(value: Any, *, where: str) -> dict[str, str]:
    obj = _require_dict(value, where=where)
    return {_norm_str(k, where=f"{where}[*]"): _norm_str(v, where=f"{where}[{k!r}]") for k, v in obj.items()}


def _module_from_obj(obj: Any, *, where: str) -> ModuleId:
    o = _require_dict(obj, where=where)
    return ModuleId(
        group=_opt_str(o.get("group"), where=f"{where}.group"),
        name=_norm_str(o.get("name"), where=f"{where}.name"),
        version=_opt_str(o.get("version"), where=f"{where}.version"),
    )


@dataclass(frozen=True)
class BuildState:
    """Host build observations for one catalog run."""

    library_names: dict[ModuleId, str] = field(default_factory=dict)
    plugins: tuple[ModuleId, ...] = ()
    versions_map: dict[str, str] = field(default_factory=dict)
    version_keys: dict[str, str] = field(default_factory=dict)
    with_versions: bool = True
    gradle_version: str | None = None
    features: FeatureFlags = field(default_factory=FeatureFlags)

    def to_config(self, *, with_versions: bool | None = None) -> CatalogConfig:
        """Build the run configuration; `with_versions` overrides the recorded mode."""
        return CatalogConfig.from_key_table(
            self.version_keys,
            versions_map=self.versions_map,
            with_versions=self.with_versions if with_versions is None else with_versions,
        )


def build_state_from_obj(data: Any) -> BuildState:
    """Validate a decoded JSON object and return a `BuildState`."""
    obj = _require_dict(data, where="build_state.json")

    library_names: dict[ModuleId, str] = {}
    deps = _require_list(_get(obj, "dependencies", []), where="dependencies")
    for i, item in enumerate(deps):
        where = f"dependencies[{i}]"
        module = _module_from_obj(item, where=where)
        library_names[module] = _norm_str(item.get("alias"), where=f"{where}.alias")

    plugins_raw = _require_list(_get(obj, "plugins", []), where="plugins")
    plugins = tuple(_module_from_obj(item, where=f"plugins[{i}]") for i, item in enumerate(plugins_raw))

    features_obj = _require_dict(_get(obj, "features", {}), where="features")
    features = FeatureFlags(
        versions_catalog=_require_bool(
            features_obj.get("versions_catalog", True), where="features.versions_catalog"
        ),
    )

    return BuildState(
        library_names=library_names,
        plugins=plugins,
        versions_map=_str_table(_get(obj, "versions", {}), where="versions"),
        version_keys=_str_table(_get(obj, "version_keys", {}), where="version_keys"),
        with_versions=_require_bool(_get(obj, "with_versions", True), where="with_versions"),
        gradle_version=_opt_str(obj.get("gradle_version"), where="gradle_version"),
        features=features,
    )


def read_build_state_json(path: str | Path) -> BuildState:
    """Read a build state JSON file (see module docstring for the schema)."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return build_state_from_obj(data)


def _module_to_obj(module: ModuleId) -> dict[str, Any]:
    return {"group": module.group, "name": module.name, "version": module.version}


def build_state_to_json_dict(state: BuildState) -> dict[str, Any]:
    """Convert a `BuildState` to a JSON-ready dict."""
    return {
        "dependencies": [{**_module_to_obj(m), "alias": alias} for m, alias in state.library_names.items()],
        "plugins": [_module_to_obj(m) for m in state.plugins],
        "versions": dict(state.versions_map),
        "version_keys": dict(state.version_keys),
        "with_versions": state.with_versions,
        "gradle_version": state.gradle_version,
        "features": {"versions_catalog": state.features.versions_catalog},
    }


def write_build_state_json(state: BuildState, path: str | Path) -> None:
    """Write build state JSON deterministically."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(build_state_to_json_dict(state), indent=2, sort_keys=True)
    if not text.endswith("\n"):
        text += "\n"
    p.write_text(text, encoding="utf-8")


__all__ = [
    "BuildState",
    "build_state_from_obj",
    "build_state_to_json_dict",
    "read_build_state_json",
    "write_build_state_json",
]
