from __future__ import annotations

import os
from pathlib import Path
from typing import TypeAlias
import tomllib

DEFAULT_CONFIG_NAME = "busypy.toml"
CONFIG_ENV = "BUSYPY_CONFIG"

ConfigTable: TypeAlias = dict[str, object]


def _load_toml(path: Path) -> ConfigTable:
    """Read a TOML file; unreadable or malformed files count as empty."""
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> ConfigTable:
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV, "").strip()
        if env_path:
            config_path = Path(env_path)
        else:
            base = root if root is not None else Path.cwd()
            config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def _section(data: ConfigTable, name: str) -> ConfigTable:
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def dispatch_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> ConfigTable:
    return _section(load_config(root=root, config_path=config_path), "dispatch")


def generate_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> ConfigTable:
    return _section(load_config(root=root, config_path=config_path), "generate")


def _split_names(value: object) -> list[str]:
    """Accept `"a, b"` or `["a", "b, c"]`; non-string items are dropped."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [
        name.strip()
        for item in value
        if isinstance(item, str)
        for name in item.split(",")
        if name.strip()
    ]


def dispatch_aliases(section: ConfigTable | None) -> dict[str, str]:
    """Alias names (lowercased) mapped to resolution queries."""
    if not isinstance(section, dict):
        return {}
    raw = section.get("aliases")
    if not isinstance(raw, dict):
        return {}
    aliases: dict[str, str] = {}
    for alias, target in raw.items():
        if isinstance(target, str) and target.strip():
            aliases[str(alias).strip().lower()] = target.strip()
    return aliases


def generate_packages(section: ConfigTable | None) -> list[str]:
    if not isinstance(section, dict):
        return []
    return _split_names(section.get("packages"))


def generate_root(section: ConfigTable | None) -> Path | None:
    if not isinstance(section, dict):
        return None
    value = section.get("root")
    if isinstance(value, str) and value.strip():
        return Path(value.strip())
    return None


def merge_payload(payload: ConfigTable, defaults: ConfigTable) -> ConfigTable:
    """Overlay command-line values on defaults; `None` means not given."""
    return {**defaults, **{key: value for key, value in payload.items() if value is not None}}
