"""Path construction helpers for sweep output directories.

Centralises the directory/file naming conventions used by the sweep runner
and the CLI.
"""

from __future__ import annotations

from pathlib import Path


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run JSON payload subdirectory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    return runs_dir(out_dir) / f"{run_id}.json"


def sweep_runs_path(out_dir: Path) -> Path:
    """Return path to the sweep runs Parquet file."""
    return logs_dir(out_dir) / "sweep_runs.parquet"


def metrics_history_path(out_dir: Path) -> Path:
    """Return path to the sampled metrics Parquet file."""
    return logs_dir(out_dir) / "metrics_history.parquet"


def outcome_summary_path(out_dir: Path) -> Path:
    """Return path to the outcome summary JSON file."""
    return logs_dir(out_dir) / "outcome_summary.json"
