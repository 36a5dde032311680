import json
from pathlib import Path

import pytest
from tools.bench_rng import BenchmarkConfig, main, run_benchmark


def _small_config(tmp_path: Path, **overrides) -> BenchmarkConfig:
    fields = {
        "output_path": tmp_path / "bench-report.json",
        "run_id": "rng-test",
        "seed": 42,
        "seq": 1,
        "throughput_draws": 500,
        "stats_draws": 20_000,
        "normal_moment_tolerance": 0.5,
        "three_sigma_min": 0.98,
        "three_sigma_max": 1.0,
        "bit_balance_tolerance": 0.05,
    }
    fields.update(overrides)
    return BenchmarkConfig(**fields)


def test_benchmark_harness_emits_report(tmp_path: Path) -> None:
    cfg = _small_config(tmp_path)
    report = run_benchmark(cfg)

    assert report["run_id"] == "rng-test"
    assert report["throughput"]["engine64_next_u64"]["draws"] == 500
    assert report["throughput"]["engine32_next_u32"]["draws_per_sec"] > 0.0
    assert len(report["checks"]["bit_balance_u32"]["bit_fractions"]) == 32
    assert sum(report["checks"]["chi_square_unbiased_range3"]["observed"]) == 20_000
    assert report["summary"]["pass"] is True

    saved = json.loads(cfg.output_path.read_text(encoding="utf-8"))
    assert saved["run_id"] == "rng-test"
    assert saved["config"]["output_path"] == cfg.output_path.as_posix()


def test_benchmark_threshold_failure_is_reported(tmp_path: Path) -> None:
    report = run_benchmark(_small_config(tmp_path, min_draws_per_sec=1e12))

    assert report["summary"]["pass"] is False
    failures = report["summary"]["threshold_failures"]
    assert any("draws/sec" in message for message in failures)


def test_benchmark_rejects_invalid_config(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        run_benchmark(_small_config(tmp_path, stats_draws=0))


def test_cli_main_prints_report_and_returns_status(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "cli.json"
    code = main(
        [
            "--output-path",
            str(output_path),
            "--run-id",
            "rng-cli",
            "--seed",
            "0x2A",
            "--throughput-draws",
            "100",
            "--stats-draws",
            "1000",
            "--bit-balance-tolerance",
            "0.5",
        ]
    )
    captured = capsys.readouterr()

    payload = json.loads(captured.out)
    assert payload["config"]["seed"] == 42
    assert payload["run_id"] == "rng-cli"
    assert output_path.exists()
    assert code == (0 if payload["summary"]["pass"] else 1)
