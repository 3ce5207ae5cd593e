"""
Config file discovery and loading.

Config files are YAML, looked up by name in `configs/` directories:
`default_<name>.yml` (or `.yaml`, or `<name>.yml`) in the working directory
first, then in the project root.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import yaml

__all__ = [
    "default_search_dirs",
    "resolve_config_path",
    "load_config",
    "apply_overrides",
]


def default_search_dirs() -> List[Path]:
    return [
        Path.cwd() / "configs",
        Path(__file__).resolve().parents[3] / "configs",  # project root configs
    ]


def resolve_config_path(
    config: Optional[Path],
    name: str,
    search_dirs: Optional[Iterable[Path]] = None,
) -> Path:
    """
    Resolve a configuration file path with smart defaults.

    Args:
        config: Explicit config path from the user, if any.
        name: Config name used to build default file names.
        search_dirs: Directories to search (default: `default_search_dirs()`).

    Returns:
        Path to the configuration file.

    Raises:
        FileNotFoundError: If an explicit path does not exist or no default is found.
    """
    if config is not None:
        config = Path(config)
        if not config.exists():
            raise FileNotFoundError(f"Configuration file not found: {config}")
        return config.resolve()

    search_dirs = list(search_dirs) if search_dirs is not None else default_search_dirs()
    default_names = [
        f"default_{name}.yml",
        f"default_{name}.yaml",
        f"{name}.yml",
        f"{name}.yaml",
    ]
    for search_dir in search_dirs:
        if not search_dir.exists():
            continue
        for candidate_name in default_names:
            candidate = search_dir / candidate_name
            if candidate.exists():
                return candidate.resolve()

    raise FileNotFoundError(
        f"No configuration file found for '{name}'. "
        f"Searched: {[str(d) for d in search_dirs]} for files like: {default_names}"
    )


def apply_overrides(config: dict, overrides: Optional[Iterable[str]]) -> dict:
    """
    Merge dot-notation overrides (`key1.key2=value`) into `config` in place.
    Values are parsed as YAML scalars/flow collections, so `3`, `0.5`,
    `true` and `[0, 2.6]` get their natural types.
    """
    for override in overrides or ():
        if "=" not in override:
            raise ValueError(f"Override must look like key.sub=value, got: {override!r}")
        key, raw = override.split("=", 1)
        keys = key.strip().split(".")
        d = config
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        d[keys[-1]] = yaml.safe_load(raw)
    return config


def load_config(path: Path, overrides: Optional[Iterable[str]] = None) -> Tuple[dict, str]:
    """
    Load a YAML config and merge CLI overrides.
    Returns the config dict and the full config path used.
    """
    path = Path(path)
    with open(path, "r") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Top level of {path} must be a mapping")
    apply_overrides(config, overrides)
    return config, str(path.resolve())
