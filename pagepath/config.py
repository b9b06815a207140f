"""Configuration loader for the path resolver."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

ENV_PREFIX = "PAGEPATH_"
CONFIG_FILE = "pagepath.toml"
CONFIG_TABLE = "pagepath"

DEFAULTS: Dict[str, Any] = {
    "root_selector": "html",
    "concurrent_fan_out": True,
    "parallel_text_reads": False,
    "suggestion_limit": 3,
    "suggestion_cutoff": 0.6,
    "trace_root": None,
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in {"true", "1", "yes"}


@dataclass(slots=True)
class ResolverConfig:
    root_selector: str = DEFAULTS["root_selector"]
    concurrent_fan_out: bool = DEFAULTS["concurrent_fan_out"]
    parallel_text_reads: bool = DEFAULTS["parallel_text_reads"]
    suggestion_limit: int = DEFAULTS["suggestion_limit"]
    suggestion_cutoff: float = DEFAULTS["suggestion_cutoff"]
    trace_root: Optional[Path] = DEFAULTS["trace_root"]

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "ResolverConfig":
        data = dict(DEFAULTS)
        data.update(mapping)
        trace_root = data.get("trace_root")
        return cls(
            root_selector=str(data["root_selector"]),
            concurrent_fan_out=_as_bool(data["concurrent_fan_out"]),
            parallel_text_reads=_as_bool(data["parallel_text_reads"]),
            suggestion_limit=int(data["suggestion_limit"]),
            suggestion_cutoff=float(data["suggestion_cutoff"]),
            trace_root=Path(trace_root) if trace_root else None,
        )


def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Path | None = None) -> ResolverConfig:
    """Load configuration from environment, optional TOML file, and defaults."""

    env_map: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            env_map[key[len(ENV_PREFIX):].lower()] = value

    path = config_path or Path(CONFIG_FILE)
    file_map: Dict[str, Any] = _load_toml(path).get(CONFIG_TABLE, {})

    merged = {**file_map, **env_map}
    return ResolverConfig.from_mapping(merged)
