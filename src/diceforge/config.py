from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

ENV_PREFIX = "DICEFORGE_"

PATH_KEYS = ("out_report", "out_samples", "log_file")

INT_KEYS = {"draws", "low", "high", "seed.value"}
FLOAT_KEYS = {"alpha"}
BOOL_KEYS = {"strict"}


def _read_config_file(config_path: Path | None) -> Dict[str, Any]:
    if not config_path:
        return {}
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported config extension: {suffix}")
    if not isinstance(data, dict):
        raise ValueError(f"Top-level config in {config_path.name} must be a mapping")
    return data


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _collect_env_vars(env: Mapping[str, str]) -> Dict[str, Any]:
    """Map DICEFORGE_* variables to (possibly dotted) config keys.

    Only the keys listed here are read; values that fail to convert are kept
    as strings.
    """
    mapping: Dict[str, str] = {
        f"{ENV_PREFIX}SEED_ENGINE": "seed.engine",
        f"{ENV_PREFIX}SEED_VALUE": "seed.value",
        f"{ENV_PREFIX}DRAWS": "draws",
        f"{ENV_PREFIX}LOW": "low",
        f"{ENV_PREFIX}HIGH": "high",
        f"{ENV_PREFIX}ALPHA": "alpha",
        f"{ENV_PREFIX}STRICT": "strict",
        f"{ENV_PREFIX}LOG_LEVEL": "log_level",
        f"{ENV_PREFIX}LOG_FORMAT": "log_format",
        f"{ENV_PREFIX}LOG_FILE": "log_file",
        f"{ENV_PREFIX}OUT_REPORT": "out_report",
        f"{ENV_PREFIX}OUT_SAMPLES": "out_samples",
    }

    result: Dict[str, Any] = {}
    for env_key, cfg_key in mapping.items():
        if env_key not in env:
            continue
        raw = env[env_key]
        try:
            if cfg_key in INT_KEYS:
                result[cfg_key] = int(raw, 0)
            elif cfg_key in FLOAT_KEYS:
                result[cfg_key] = float(raw)
            elif cfg_key in BOOL_KEYS:
                result[cfg_key] = _parse_bool(raw)
            else:
                result[cfg_key] = raw
        except ValueError:
            result[cfg_key] = raw
    return result


def _set_nested(config: Dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = dotted_key.split(".")
    cursor = config
    for part in parts[:-1]:
        if part not in cursor or not isinstance(cursor[part], dict):
            cursor[part] = {}
        cursor = cursor[part]
    cursor[parts[-1]] = value


def _apply_overrides(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = json.loads(json.dumps(base))  # deep copy via JSON
    for key, value in overrides.items():
        if "." in key:
            _set_nested(merged, key, value)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def canonical_json_dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=True, sort_keys=True, separators=(",", ":"))


def _extract(path: str, source: Mapping[str, Any]) -> Any:
    cur: Any = source
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return None
        cur = cur[part]
    return cur


def compute_params_hash(resolved: Mapping[str, Any]) -> str:
    """Hash of the parameters that determine sampled output; logging and paths excluded."""
    include = ("seed.engine", "seed.value", "draws", "low", "high", "alpha")
    contract = {key: _extract(key, resolved) for key in include}
    contract = {k: v for k, v in contract.items() if v is not None}
    digest = hashlib.sha256(canonical_json_dumps(contract).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def resolve_paths(
    resolved: Dict[str, Any],
    config_file: Path | None,
    cli_overrides: Mapping[str, Any],
) -> Dict[str, Any]:
    """Normalize paths per policy.

    - Paths from config file: resolve relative to config directory
    - Paths from CLI: resolve relative to CWD
    """
    cwd = Path.cwd()
    cfg_dir = config_file.parent if config_file else None

    def normalize(path_value: str, is_cli: bool) -> str | None:
        if path_value == "":
            return None
        p = Path(path_value)
        if p.is_absolute():
            return str(p)
        base = cwd if is_cli else (cfg_dir or cwd)
        return str((base / p).resolve())

    result = dict(resolved)
    for key in PATH_KEYS:
        value = resolved.get(key)
        if value is None:
            continue
        result[key] = normalize(str(value), key in cli_overrides)
    return result


DEFAULTS: Dict[str, Any] = {
    "seed": {"engine": "py_random", "value": None},
    "draws": 10000,
    "low": 1,
    "high": 6,
    "alpha": 0.01,
    "strict": False,
    "log_level": "INFO",
    "log_format": "text",
}


def resolve_parameters(
    *,
    config_path_str: str | None,
    cli_overrides: Mapping[str, Any],
    env: Mapping[str, str] | None = None,
) -> Tuple[Dict[str, Any], str, Path | None]:
    """Resolve parameters with precedence CLI > ENV > config > defaults.

    Returns (resolved_params, params_hash, config_path)
    """
    config_path = Path(config_path_str).resolve() if config_path_str else None
    file_cfg = _read_config_file(config_path)
    env_map = _collect_env_vars(os.environ if env is None else env)

    merged = _apply_overrides(DEFAULTS, file_cfg)
    merged = _apply_overrides(merged, env_map)
    merged = _apply_overrides(merged, cli_overrides)

    merged = resolve_paths(merged, config_path, cli_overrides)

    params_hash = compute_params_hash(merged)
    return merged, params_hash, config_path
