"""Parquet schema definitions for seed-sweep artifacts.

The Arrow schemas used for persisting per-sample metrics and per-run outcomes
are centralised here so that writers and readers share the same column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

SWEEP_SCHEMA_VERSION = 1
RUN_PAYLOAD_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Sweep schemas
# ---------------------------------------------------------------------------

METRICS_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("population", pa.int64()),
        ("density", pa.float64()),
        ("births", pa.int64()),
        ("deaths", pa.int64()),
        ("delta", pa.int64()),
        # Null unless the sweep collected enhanced metrics.
        ("entropy", pa.float64()),
        ("state_hash", pa.int64()),
    ]
)

SWEEP_RUNS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("dimensions", pa.string()),
        ("neighborhood", pa.string()),
        ("radius", pa.int64()),
        ("steps", pa.int64()),
        ("initial_density", pa.float64()),
        ("metrics_interval", pa.int64()),
        ("outcome", pa.string()),
        ("final_population", pa.int64()),
        ("samples", pa.int64()),
    ]
)
