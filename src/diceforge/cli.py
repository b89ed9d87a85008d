from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from .config import resolve_parameters
from .core.bigint import BigInt128
from .logging_setup import setup_logging
from .rng import ENGINES, create_generator
from .serialize import build_run_meta, emit_report_json, emit_samples_csv
from .stats import run_checks
from .version import __version__

logger = logging.getLogger(__name__)

app = typer.Typer(help="Pseudo-random sampling toolkit CLI")

SAMPLE_KINDS = ("raw", "unit", "int", "real", "choice", "shuffle")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        is_eager=True,
        callback=_version_callback,
    ),
) -> None:
    """Seeded sampling, uniformity checks and 128-bit modular arithmetic."""


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve(config: Optional[str], overrides: Dict[str, Any]) -> tuple[Dict[str, Any], str]:
    cli_overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        resolved, params_hash, _cfg_path = resolve_parameters(
            config_path_str=config, cli_overrides=cli_overrides
        )
        setup_logging(
            level=str(resolved.get("log_level", "INFO")),
            log_file=resolved.get("log_file"),
            json_format=(str(resolved.get("log_format", "text")) == "json"),
        )
    except (ValueError, OSError, yaml.YAMLError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    return resolved, params_hash


def _make_generator(resolved: Dict[str, Any]):
    seed_cfg = resolved.get("seed", {})
    engine = str(seed_cfg.get("engine") or "py_random")
    seed = seed_cfg.get("value")
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            typer.echo(f"Error: seed must be an integer, got {seed!r}", err=True)
            raise typer.Exit(code=2)
    if engine.strip().lower() not in ENGINES:
        typer.echo(f"Error: unsupported RNG engine {engine!r} (choose from: {', '.join(ENGINES)})", err=True)
        raise typer.Exit(code=2)
    try:
        return engine, seed, create_generator(engine, seed)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)


def _integral_bound(name: str, value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        typer.echo(f"Error: --{name} must be an integer for --kind int, got {value}", err=True)
        raise typer.Exit(code=2)
    try:
        return int(value)
    except (TypeError, ValueError):
        typer.echo(f"Error: --{name} must be an integer for --kind int, got {value!r}", err=True)
        raise typer.Exit(code=2)


@app.command()
def sample(
    kind: str = typer.Option("unit", "--kind", help="|".join(SAMPLE_KINDS)),
    count: int = typer.Option(10, "--count", "-n", help="Number of draws"),
    low: float = typer.Option(None, "--low", help="Lower bound for int/real draws"),
    high: float = typer.Option(None, "--high", help="Upper bound for int/real draws"),
    items: str = typer.Option(None, "--items", help="Comma separated items for choice/shuffle"),
    weights: str = typer.Option(None, "--weights", help="Comma separated weights for choice"),
    engine: str = typer.Option(None, "--engine", help="RNG engine name"),
    seed: int = typer.Option(None, "--seed", help="Seed value"),
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    out_samples: str = typer.Option(None, "--out-samples", help="Write draws to this CSV"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
) -> None:
    """Draw values from a seeded generator."""
    if kind not in SAMPLE_KINDS:
        typer.echo(f"Error: unknown kind {kind!r}; choose from {', '.join(SAMPLE_KINDS)}", err=True)
        raise typer.Exit(code=2)

    resolved, _params_hash = _resolve(
        config,
        {
            "seed.engine": engine,
            "seed.value": seed,
            "low": low,
            "high": high,
            "out_samples": out_samples,
            "log_level": log_level,
        },
    )
    engine_name, _seed, rng = _make_generator(resolved)
    lo, hi = resolved["low"], resolved["high"]
    item_list = _split_list(items)

    try:
        if kind == "raw":
            values: List[Any] = [rng.next() for _ in range(count)]
        elif kind == "unit":
            values = [rng.next_unit() for _ in range(count)]
        elif kind == "int":
            int_lo, int_hi = _integral_bound("low", lo), _integral_bound("high", hi)
            values = [rng.next_in_range(int_lo, int_hi) for _ in range(count)]
        elif kind == "real":
            values = [rng.next_in_crange(float(lo), float(hi)) for _ in range(count)]
        elif kind == "choice":
            weight_list = [float(w) for w in _split_list(weights)] if weights else None
            values = [rng.choice(item_list, weight_list) for _ in range(count)]
        else:
            values = []
            for _ in range(count):
                arr = list(item_list)
                rng.shuffle(arr)
                values.append(" ".join(arr))
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    logger.info("Drew %d %s values from %s", len(values), kind, engine_name)

    target = resolved.get("out_samples")
    if target:
        emit_samples_csv(
            Path(target), kind=kind, samples=values, mkdirs=(not no_mkdirs), overwrite=force
        )
        typer.echo(f"Wrote {len(values)} samples to {target}")
    else:
        for value in values:
            typer.echo(str(value))


@app.command()
def check(
    draws: int = typer.Option(None, "--draws", help="Draws per statistical test"),
    low: int = typer.Option(None, "--low", help="Lower bound for the integer range test"),
    high: int = typer.Option(None, "--high", help="Upper bound for the integer range test"),
    alpha: float = typer.Option(None, "--alpha", help="Significance level"),
    engine: str = typer.Option(None, "--engine", help="RNG engine name"),
    seed: int = typer.Option(None, "--seed", help="Seed value"),
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    out_report: str = typer.Option(None, "--out-report", help="report.json output path"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    log_file: str = typer.Option(None, "--log-file", help="Log file path"),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict", help="Exit 1 if any test fails"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
) -> None:
    """Run uniformity tests against a seeded generator."""
    resolved, params_hash = _resolve(
        config,
        {
            "draws": draws,
            "low": low,
            "high": high,
            "alpha": alpha,
            "seed.engine": engine,
            "seed.value": seed,
            "out_report": out_report,
            "log_level": log_level,
            "log_file": log_file,
            "strict": strict,
        },
    )
    engine_name, seed_value, rng = _make_generator(resolved)

    try:
        report = run_checks(
            rng,
            draws=int(resolved["draws"]),
            low=int(resolved["low"]),
            high=int(resolved["high"]),
            alpha=float(resolved["alpha"]),
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    for name, result in report["tests"].items():
        status = "PASS" if result["passed"] else "FAIL"
        typer.echo(f"{status} {name}")
    typer.echo(f"Params hash: {params_hash}")

    target = resolved.get("out_report")
    if target:
        run_meta = build_run_meta(
            app_version=__version__, params_hash=params_hash, seed=seed_value, engine=engine_name
        )
        emit_report_json(
            Path(target), report=report, run_meta=run_meta, mkdirs=(not no_mkdirs), overwrite=force
        )
        typer.echo(f"Report written to {target}")

    if resolved.get("strict") and not report["passed"]:
        logger.warning("Uniformity checks failed for engine %s", engine_name)
        raise typer.Exit(code=1)


@app.command()
def bigint(
    value: str = typer.Argument(..., help="Value in [0, 2**128); 0x prefix accepted"),
    modulus: str = typer.Option(None, "--mod", help="Reduce modulo this 64-bit value"),
    square: bool = typer.Option(False, "--square", help="Square (mod 2**128) before reducing"),
) -> None:
    """Apply truncating square and modular reduction to a 128-bit value, printing limbs."""
    try:
        number = BigInt128.from_int(int(value, 0))
        if square:
            number.square()
        if modulus is not None:
            number.mod(int(modulus, 0))
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    typer.echo(number.render())
    typer.echo(str(number.to_int()))


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
