"""Tests for nd_automata.experiments.sweep module."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from nd_automata.config.types import (
    ExperimentConfig,
    NeighborhoodSpec,
    RuleSpec,
    SeedSweepConfig,
)
from nd_automata.experiments.experiment import run_experiment
from nd_automata.experiments.sweep import (
    deterministic_run_id,
    estimate_work_units,
    run_seed_sweep,
)
from nd_automata.io.schemas import METRICS_SCHEMA, SWEEP_RUNS_SCHEMA


def _experiment(**overrides: object) -> ExperimentConfig:
    params: dict[str, object] = {
        "dimensions": (8, 8),
        "neighborhood": NeighborhoodSpec(),
        "rule": RuleSpec(birth=(3,), survival=(2, 3)),
        "steps": 10,
        "initial_density": 0.3,
    }
    params.update(overrides)
    return ExperimentConfig(**params)  # type: ignore[arg-type]


def test_run_seed_sweep_writes_parquet_and_json(tmp_path: Path) -> None:
    config = SeedSweepConfig(experiment=_experiment(), seeds=(1, 2, 3), out_dir=tmp_path)
    results = run_seed_sweep(config)

    assert len(results) == 3

    runs = pq.read_table(tmp_path / "logs" / "sweep_runs.parquet")
    assert runs.schema.equals(SWEEP_RUNS_SCHEMA)
    assert runs.column("run_id").to_pylist() == ["seed1", "seed2", "seed3"]
    assert runs.column("seed").to_pylist() == [1, 2, 3]
    assert runs.column("outcome").to_pylist() == [r.outcome.value for r in results]
    assert runs.column("dimensions").to_pylist() == ["8x8"] * 3

    metrics = pq.read_table(tmp_path / "logs" / "metrics_history.parquet")
    assert metrics.schema.equals(METRICS_SCHEMA)
    assert metrics.num_rows == 30
    assert metrics.column("entropy").null_count == 30

    json_files = sorted((tmp_path / "runs").glob("*.json"))
    assert [p.stem for p in json_files] == ["seed1", "seed2", "seed3"]
    payload = json.loads(json_files[0].read_text())
    assert payload["config"]["seed"] == 1
    assert payload["final_population"] == results[0].final_population
    assert payload["schema_version"] == 1

    summary = json.loads((tmp_path / "logs" / "outcome_summary.json").read_text())
    assert summary["runs"] == 3
    assert sum(summary["outcome_counts"].values()) == 3


def test_run_seed_sweep_matches_single_runs(tmp_path: Path) -> None:
    base = _experiment()
    results = run_seed_sweep(SeedSweepConfig(experiment=base, seeds=(5, 6), out_dir=tmp_path))
    for seed, result in zip((5, 6), results):
        single = run_experiment(_experiment(seed=seed))
        assert result.metrics_history == single.metrics_history
        assert result.config.seed == seed
    assert base.seed is None


def test_run_seed_sweep_enhanced_metrics_persisted(tmp_path: Path) -> None:
    config = SeedSweepConfig(
        experiment=_experiment(steps=6, metrics_interval=2),
        seeds=(4,),
        out_dir=tmp_path,
        enhanced_metrics=True,
    )
    run_seed_sweep(config)
    metrics = pq.read_table(tmp_path / "logs" / "metrics_history.parquet")
    assert metrics.column("step").to_pylist() == [2, 4, 6]
    assert metrics.column("entropy").null_count == 0
    assert metrics.column("state_hash").null_count == 0


def test_run_seed_sweep_rejects_excessive_workload(tmp_path: Path) -> None:
    config = SeedSweepConfig(
        experiment=_experiment(dimensions=(1000, 1000, 1000), steps=100),
        seeds=(1,),
        out_dir=tmp_path,
    )
    with pytest.raises(ValueError, match="safety threshold"):
        run_seed_sweep(config)
    assert not (tmp_path / "logs").exists()


def test_estimate_work_units() -> None:
    config = SeedSweepConfig(experiment=_experiment(steps=10), seeds=(1, 2))
    assert estimate_work_units(config) == 64 * 8 * 10 * 2


def test_deterministic_run_id() -> None:
    assert deterministic_run_id(7) == "seed7"
    assert deterministic_run_id(-3) == "seed-3"
