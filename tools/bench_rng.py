from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from time import perf_counter
from typing import Any

import numpy as np

if __package__ is None or __package__ == "":
    REPO_ROOT = Path(__file__).resolve().parents[1]
    for candidate in (REPO_ROOT, REPO_ROOT / "python"):
        if str(candidate) not in sys.path:
            sys.path.insert(0, str(candidate))

from crand import (  # noqa: E402
    Engine32,
    Engine64,
    Normal64,
    UniformFloat64,
    UniformInt32,
    UniformInt64,
    raw_array,
    sample_array,
)

# Chi-square critical value for 2 degrees of freedom at p = 0.001.
CHI2_CRITICAL_DF2 = 13.816


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _default_run_id() -> str:
    return datetime.now(UTC).strftime("rng-%Y%m%dT%H%M%SZ")


@dataclass(frozen=True)
class BenchmarkConfig:
    output_path: Path | None = None
    run_id: str | None = None
    seed: int = 42
    seq: int = 1

    throughput_draws: int = 200_000
    stats_draws: int = 1_000_000

    normal_mean: float = -12.0
    normal_stddev: float = 6.0
    normal_moment_tolerance: float = 0.05
    three_sigma_min: float = 0.990
    three_sigma_max: float = 0.999

    bit_balance_tolerance: float = 0.005
    min_draws_per_sec: float = 0.0


def _validate_config(cfg: BenchmarkConfig) -> None:
    if cfg.throughput_draws <= 0:
        raise ValueError("throughput_draws must be positive.")
    if cfg.stats_draws <= 0:
        raise ValueError("stats_draws must be positive.")
    if cfg.normal_stddev <= 0.0:
        raise ValueError("normal_stddev must be positive.")
    if cfg.three_sigma_min > cfg.three_sigma_max:
        raise ValueError("three_sigma_min must not exceed three_sigma_max.")


def _serialize_config(cfg: BenchmarkConfig) -> dict[str, Any]:
    payload = asdict(cfg)
    payload["output_path"] = cfg.output_path.as_posix() if cfg.output_path is not None else None
    return payload


def _time_draws(draw_fn: Callable[[], Any], draws: int) -> dict[str, float]:
    start = perf_counter()
    for _ in range(draws):
        draw_fn()
    elapsed = perf_counter() - start
    return {
        "draws": int(draws),
        "elapsed_seconds": elapsed,
        "draws_per_sec": float(draws) / elapsed if elapsed > 0.0 else 0.0,
    }


def _bench_throughput(cfg: BenchmarkConfig) -> dict[str, dict[str, float]]:
    engine32 = Engine32.with_seq(cfg.seed, cfg.seq)
    engine64 = Engine64.with_seq(cfg.seed, cfg.seq)
    dice32 = UniformInt32.init(1, 6)
    dice64 = UniformInt64.init(1, 6)
    unit64 = UniformFloat64.init(0.0, 1.0)
    normal = Normal64.init(cfg.normal_mean, cfg.normal_stddev)

    return {
        "engine32_next_u32": _time_draws(engine32.next_u32, cfg.throughput_draws),
        "engine64_next_u64": _time_draws(engine64.next_u64, cfg.throughput_draws),
        "uniform_i32_sample": _time_draws(lambda: dice32.sample(engine32), cfg.throughput_draws),
        "uniform_i32_unbiased": _time_draws(
            lambda: dice32.unbiased_sample(engine32), cfg.throughput_draws
        ),
        "uniform_i64_sample": _time_draws(lambda: dice64.sample(engine64), cfg.throughput_draws),
        "uniform_f64_sample": _time_draws(lambda: unit64.sample(engine64), cfg.throughput_draws),
        "normal_f64_sample": _time_draws(lambda: normal.sample(engine64), cfg.throughput_draws),
    }


def _bit_balance(cfg: BenchmarkConfig) -> dict[str, Any]:
    words = raw_array(Engine32.with_seq(cfg.seed, cfg.seq), cfg.stats_draws)
    fractions = [float(np.mean((words >> np.uint32(bit)) & np.uint32(1))) for bit in range(32)]
    worst = max(abs(fraction - 0.5) for fraction in fractions)
    return {
        "draws": int(cfg.stats_draws),
        "bit_fractions": fractions,
        "max_deviation": worst,
        "tolerance": float(cfg.bit_balance_tolerance),
        "pass": worst <= cfg.bit_balance_tolerance,
    }


def _chi_square_range3(cfg: BenchmarkConfig) -> dict[str, Any]:
    spec = UniformInt32.init(0, 2)
    engine = Engine32.with_seq(cfg.seed, cfg.seq)
    values = sample_array(spec, engine, cfg.stats_draws, unbiased=True)
    observed = np.bincount(values, minlength=3).astype(np.float64)
    expected = float(cfg.stats_draws) / 3.0
    statistic = float(np.sum((observed - expected) ** 2 / expected))
    return {
        "draws": int(cfg.stats_draws),
        "observed": [int(count) for count in observed],
        "statistic": statistic,
        "critical": CHI2_CRITICAL_DF2,
        "pass": statistic < CHI2_CRITICAL_DF2,
    }


def _normal_moments(cfg: BenchmarkConfig) -> dict[str, Any]:
    spec = Normal64.init(cfg.normal_mean, cfg.normal_stddev)
    values = sample_array(spec, Engine64.with_seq(cfg.seed, cfg.seq), cfg.stats_draws)
    mean = float(np.mean(values))
    stddev = float(np.std(values))
    within = np.abs(values - cfg.normal_mean) <= 3.0 * cfg.normal_stddev
    three_sigma = float(np.mean(within))
    mean_ok = abs(mean - cfg.normal_mean) <= cfg.normal_moment_tolerance
    stddev_ok = abs(stddev - cfg.normal_stddev) <= cfg.normal_moment_tolerance
    sigma_ok = cfg.three_sigma_min <= three_sigma <= cfg.three_sigma_max
    return {
        "draws": int(cfg.stats_draws),
        "mean": mean,
        "stddev": stddev,
        "three_sigma_fraction": three_sigma,
        "pass": bool(mean_ok and stddev_ok and sigma_ok),
    }


def _threshold_failures(
    cfg: BenchmarkConfig,
    throughput: dict[str, dict[str, float]],
    checks: dict[str, dict[str, Any]],
) -> list[str]:
    failures: list[str] = []
    for name, metrics in throughput.items():
        if metrics["draws_per_sec"] < cfg.min_draws_per_sec:
            failures.append(
                f"{name} draws/sec {metrics['draws_per_sec']:.1f} "
                f"below floor {cfg.min_draws_per_sec:.1f}"
            )
    for name, result in checks.items():
        if not result["pass"]:
            failures.append(f"statistical check failed: {name}")
    return failures


def run_benchmark(cfg: BenchmarkConfig) -> dict[str, Any]:
    _validate_config(cfg)
    run_id = cfg.run_id or _default_run_id()

    throughput = _bench_throughput(cfg)
    checks = {
        "bit_balance_u32": _bit_balance(cfg),
        "chi_square_unbiased_range3": _chi_square_range3(cfg),
        "normal_moments": _normal_moments(cfg),
    }
    failures = _threshold_failures(cfg, throughput, checks)

    output_path = cfg.output_path
    if output_path is None:
        output_path = Path("artifacts/benchmarks") / f"{run_id}.json"

    report: dict[str, Any] = {
        "generated_at": now_iso(),
        "run_id": run_id,
        "config": _serialize_config(cfg),
        "throughput": throughput,
        "checks": checks,
        "summary": {
            "pass": not failures,
            "threshold_failures": failures,
            "report_path": output_path.as_posix(),
        },
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    return report


def _parse_args(argv: list[str] | None = None) -> BenchmarkConfig:
    parser = argparse.ArgumentParser(description="crand engine throughput and statistics harness")
    parser.add_argument("--output-path", type=Path, default=None)
    parser.add_argument("--run-id", type=str, default=None)
    parser.add_argument(
        "--seed",
        type=lambda value: int(value, 0),
        default=42,
        help="Engine seed (accepts decimal or 0x-prefixed hex)",
    )
    parser.add_argument("--seq", type=lambda value: int(value, 0), default=1)
    parser.add_argument("--throughput-draws", type=int, default=200_000)
    parser.add_argument("--stats-draws", type=int, default=1_000_000)
    parser.add_argument("--bit-balance-tolerance", type=float, default=0.005)
    parser.add_argument("--min-draws-per-sec", type=float, default=0.0)

    args = parser.parse_args(argv)
    return BenchmarkConfig(
        output_path=args.output_path,
        run_id=args.run_id,
        seed=args.seed,
        seq=args.seq,
        throughput_draws=args.throughput_draws,
        stats_draws=args.stats_draws,
        bit_balance_tolerance=args.bit_balance_tolerance,
        min_draws_per_sec=args.min_draws_per_sec,
    )


def main(argv: list[str] | None = None) -> int:
    cfg = _parse_args(argv)
    report = run_benchmark(cfg)
    print(json.dumps(report, indent=2))
    return 0 if report["summary"]["pass"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
