from __future__ import annotations

import csv
import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def _refuse_overwrite(path: Path, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file without --force: {path}")


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    _refuse_overwrite(path, overwrite)
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: Optional[int],
    engine: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "engine": engine,
        "hash_algorithm": "sha256",
    }


def emit_report_json(
    path: Path,
    *,
    report: Dict[str, object],
    run_meta: Dict[str, object],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    write_json(path, {"run_meta": run_meta, **report}, mkdirs=mkdirs, overwrite=overwrite)


def emit_samples_csv(
    path: Path,
    *,
    kind: str,
    samples: Sequence[object],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    _refuse_overwrite(path, overwrite)
    ensure_parent(path, mkdirs=mkdirs)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["index", kind])
        for idx, value in enumerate(samples):
            writer.writerow([idx, value])
