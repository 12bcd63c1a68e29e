"""I/O layer: Arrow schemas and output path helpers."""

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

__all__ = [
    "METRICS_SCHEMA",
    "RUN_PAYLOAD_SCHEMA_VERSION",
    "SWEEP_RUNS_SCHEMA",
    "SWEEP_SCHEMA_VERSION",
    "logs_dir",
    "metrics_history_path",
    "outcome_summary_path",
    "run_payload_path",
    "runs_dir",
    "sweep_runs_path",
]
