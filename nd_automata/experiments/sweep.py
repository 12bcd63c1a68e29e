"""Seed sweep: one experiment repeated over many seeds, persisted to Parquet/JSON."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from nd_automata.config.constants import (
    DEFAULT_METRICS_INTERVAL,
    DEFAULT_NEIGHBORHOOD_RADIUS,
    MAX_EXPERIMENT_WORK_UNITS,
)
from nd_automata.config.types import (
    EnhancedMetrics,
    ExperimentResult,
    Metrics,
    Outcome,
    SeedSweepConfig,
)
from nd_automata.domain.classifier import OutcomeClassifier, hash_based_classifier
from nd_automata.domain.neighborhood import get_max_neighbors
from nd_automata.experiments.experiment import run_experiment
from nd_automata.experiments.summaries import build_outcome_summary
from nd_automata.io.paths import (
    logs_dir,
    metrics_history_path,
    outcome_summary_path,
    run_payload_path,
    runs_dir,
    sweep_runs_path,
)
from nd_automata.io.schemas import (
    METRICS_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    SWEEP_RUNS_SCHEMA,
    SWEEP_SCHEMA_VERSION,
)

logger = logging.getLogger(__name__)


def deterministic_run_id(seed: int) -> str:
    return f"seed{seed}"


def estimate_work_units(config: SeedSweepConfig) -> int:
    """Cells x neighbors x steps x seeds for the whole sweep."""
    experiment = config.experiment
    cells = 1
    for size in experiment.dimensions:
        cells *= size
    radius = experiment.neighborhood.radius or DEFAULT_NEIGHBORHOOD_RADIUS
    neighbors = get_max_neighbors(experiment.dimensions, experiment.neighborhood.type, radius)
    return cells * neighbors * experiment.steps * len(config.seeds)


def _metric_columns(run_id: str, history: Sequence[Metrics]) -> dict[str, list[object]]:
    columns: dict[str, list[object]] = {name: [] for name in METRICS_SCHEMA.names}
    for metrics in history:
        columns["run_id"].append(run_id)
        columns["step"].append(metrics.step)
        columns["population"].append(metrics.population)
        columns["density"].append(metrics.density)
        columns["births"].append(metrics.births)
        columns["deaths"].append(metrics.deaths)
        columns["delta"].append(metrics.delta)
        if isinstance(metrics, EnhancedMetrics):
            columns["entropy"].append(metrics.entropy)
            columns["state_hash"].append(metrics.state_hash)
        else:
            columns["entropy"].append(None)
            columns["state_hash"].append(None)
    return columns


def run_seed_sweep(
    config: SeedSweepConfig,
    classifier: OutcomeClassifier | Callable[[Sequence[Metrics]], Outcome] = hash_based_classifier,
) -> list[ExperimentResult]:
    """Run the experiment once per seed and persist sweep artifacts.

    Writes ``logs/sweep_runs.parquet``, ``logs/metrics_history.parquet``,
    ``logs/outcome_summary.json`` and one ``runs/<run_id>.json`` per seed
    under ``config.out_dir``. Seeds run sequentially in the given order.
    """
    total_work_units = estimate_work_units(config)
    if total_work_units > MAX_EXPERIMENT_WORK_UNITS:
        raise ValueError(
            "sweep workload exceeds safety threshold; reduce dimensions/steps/seeds"
        )

    out_dir = config.out_dir
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    base = config.experiment
    results: list[ExperimentResult] = []
    run_rows: list[dict[str, object]] = []
    metric_writer: pq.ParquetWriter | None = None

    try:
        for seed in config.seeds:
            run_id = deterministic_run_id(seed)
            logger.info("sweep run %s (%d of %d)", run_id, len(results) + 1, len(config.seeds))
            run_config = dataclasses.replace(base, seed=seed)
            result = run_experiment(
                run_config, classifier, enhanced_metrics=config.enhanced_metrics
            )
            results.append(result)

            metric_table = pa.Table.from_pydict(
                _metric_columns(run_id, result.metrics_history), schema=METRICS_SCHEMA
            )
            if metric_writer is None:
                metric_writer = pq.ParquetWriter(metrics_history_path(out_dir), METRICS_SCHEMA)
            metric_writer.write_table(metric_table)

            run_rows.append(
                {
                    "schema_version": SWEEP_SCHEMA_VERSION,
                    "run_id": run_id,
                    "seed": seed,
                    "dimensions": "x".join(str(d) for d in base.dimensions),
                    "neighborhood": base.neighborhood.type.value,
                    "radius": base.neighborhood.radius or DEFAULT_NEIGHBORHOOD_RADIUS,
                    "steps": base.steps,
                    "initial_density": float(base.initial_density),
                    "metrics_interval": base.metrics_interval or DEFAULT_METRICS_INTERVAL,
                    "outcome": result.outcome.value,
                    "final_population": result.final_population,
                    "samples": len(result.metrics_history),
                }
            )

            run_payload = {
                "run_id": run_id,
                "config": run_config.to_dict(),
                "outcome": result.outcome.value,
                "final_population": result.final_population,
                "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
            }
            run_payload_path(out_dir, run_id).write_text(
                json.dumps(run_payload, ensure_ascii=False, indent=2)
            )
    finally:
        if metric_writer is not None:
            metric_writer.close()

    pq.write_table(
        pa.Table.from_pylist(run_rows, schema=SWEEP_RUNS_SCHEMA), sweep_runs_path(out_dir)
    )
    summary = build_outcome_summary(results)
    outcome_summary_path(out_dir).write_text(json.dumps(summary, ensure_ascii=False, indent=2))
    logger.info("sweep artifacts written to %s", logs_dir(out_dir))
    return results
