import copy
import os
from pathlib import Path

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = PROJECT_ROOT / "config" / "gedcom_merge.yml"

DEFAULTS = {
    "paths": {
        "master": "public/data/family.ged",
        "logs_dir": "logs",
    },
    "logging": {
        "level": "INFO",
        "file": "gedcom_merge.log",
        "rotate": False,
    },
    "header": {
        "tool": "GedcomMergeTool",
        "version": "1.0",
        "name": "GEDCOM Merge Tool",
    },
    "citations": {
        "scope": "record",
    },
    "reserved_sources": [
        {
            "title": "Testimony of the first family informant",
            "author": "First informant",
            "note": "First-hand family information provided by the first informant",
        },
        {
            "title": "Testimony of the second family informant",
            "author": "Second informant",
            "note": "First-hand family information provided by the second informant",
        },
    ],
    "debug": False,
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


class GMConfig:
    def __init__(self, data):
        data = _merge(DEFAULTS, data or {})
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.header = data.get("header", {})
        self.citations = data.get("citations", {})
        self.reserved_sources = list(data.get("reserved_sources", []))
        self.debug = bool(data.get("debug", False))

    @property
    def master_path(self) -> Path:
        master = Path(self.paths.get("master") or DEFAULTS["paths"]["master"])
        if not master.is_absolute():
            master = Path.cwd() / master
        return master

    @property
    def citation_scope(self) -> str:
        return str(self.citations.get("scope", "record")).lower()


def config_path() -> Path:
    override = os.environ.get("GEDCOM_MERGE_CONFIG")
    return Path(override) if override else CONFIG_PATH


def load_config() -> 'GMConfig':
    path = config_path()
    if not path.exists():
        # Installed without the project tree: run on built-in defaults.
        return GMConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GMConfig(data)

_config_cache = None

def get_config() -> 'GMConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
