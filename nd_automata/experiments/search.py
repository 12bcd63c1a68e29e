"""CLI entrypoint for running experiments and seed sweeps.

This module owns CLI argument parsing and mode dispatch. All domain logic
lives in the extracted modules:

- ``nd_automata.config``                 – configuration dataclasses
- ``nd_automata.domain``                 – grid, neighborhoods, rules, classifiers
- ``nd_automata.experiments.experiment`` – single-run orchestration
- ``nd_automata.experiments.sweep``      – multi-seed sweeps and persistence
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from nd_automata.config.types import (
    ExperimentConfig,
    NeighborhoodSpec,
    NeighborhoodType,
    RelativeThreshold,
    RuleSpec,
    SeedSweepConfig,
    Threshold,
)
from nd_automata.domain.classifier import (
    hash_based_classifier,
    multi_metric_classifier,
    simple_classifier,
)
from nd_automata.experiments.experiment import run_experiment
from nd_automata.experiments.summaries import build_outcome_summary
from nd_automata.experiments.sweep import run_seed_sweep

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

CLASSIFIER_CHOICES = ("hash-based", "multi-metric")
"""Values accepted by ``--classifier``."""

DEFAULT_BIRTH = "3"
DEFAULT_SURVIVAL = "2,3"
"""Conway's B3/S23 when no rule is configured."""

_RELATIVE_PREFIX = "rel:"

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_dimensions(raw: object) -> tuple[int, ...]:
    """Parse ``20x20x20`` strings or integer lists into a dimension tuple."""
    if isinstance(raw, str):
        tokens = [token.strip() for token in raw.lower().split("x")]
        try:
            return tuple(int(token) for token in tokens)
        except ValueError as exc:
            raise ValueError("dimensions must use integer AxBxC format") from exc
    if isinstance(raw, (list, tuple)):
        return tuple(_coerce_int(value, "dimensions") for value in raw)
    raise ValueError("dimensions must be an AxB string or a list of integers")


def _parse_threshold_token(token: str) -> Threshold:
    if token.startswith(_RELATIVE_PREFIX):
        try:
            return RelativeThreshold(relative=float(token[len(_RELATIVE_PREFIX) :]))
        except ValueError as exc:
            raise ValueError(f"invalid relative threshold: {token!r}") from exc
    try:
        return int(token)
    except ValueError as exc:
        raise ValueError(f"thresholds must be integers or rel:<fraction>, got {token!r}") from exc


def _parse_thresholds(raw: object, label: str) -> tuple[Threshold, ...]:
    """Parse a comma list (``2,3,rel:0.5``) or a JSON list of thresholds."""
    if isinstance(raw, str):
        parts = [part.strip() for part in raw.split(",") if part.strip()]
        return tuple(_parse_threshold_token(part) for part in parts)
    if isinstance(raw, (list, tuple)):
        return getattr(RuleSpec.from_dict({label: list(raw)}), label)
    raise ValueError(f"{label} must be a comma list or a list of thresholds")


def _parse_seed_list(raw: object) -> tuple[int, ...]:
    """Parse comma-delimited seeds (or a JSON list) into distinct integers."""
    if isinstance(raw, str):
        parts = [part.strip() for part in raw.split(",") if part.strip()]
    elif isinstance(raw, (list, tuple)):
        parts = list(raw)
    else:
        raise ValueError("seeds must be a comma list or a list of integers")
    if not parts:
        raise ValueError("seeds must not be empty")
    seeds = tuple(_coerce_int(part, "seeds") for part in parts)
    if len(set(seeds)) != len(seeds):
        raise ValueError("seeds must include distinct values")
    return seeds


def _parse_neighborhood_type(raw: str) -> NeighborhoodType:
    try:
        return NeighborhoodType(raw)
    except ValueError as exc:
        valid = ", ".join(t.value for t in NeighborhoodType)
        raise ValueError(f"neighborhood must be one of {valid}") from exc


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a float value, got {raw!r}") from exc
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: Mapping[str, Any], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_optional_int(cli_val: int | None, key: str, file_cfg: Mapping[str, Any]) -> int | None:
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_int(raw, key)


def _nested(file_cfg: Mapping[str, Any], section: str) -> dict[str, Any]:
    """Return a nested config section (``neighborhood`` / ``rule``) as a dict."""
    value = file_cfg.get(section)
    if isinstance(value, Mapping):
        return dict(value)
    if value is None:
        return {}
    if section == "neighborhood" and isinstance(value, str):
        return {"type": value}
    raise ValueError(f"{section} must be an object")


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate n-dimensional cellular automata and classify their outcomes"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--dimensions", type=str, default=None, help="grid shape, e.g. 20x20x20")
    parser.add_argument(
        "--neighborhood",
        type=str,
        choices=[t.value for t in NeighborhoodType],
        default=None,
    )
    parser.add_argument("--range", dest="radius", type=int, default=None)
    parser.add_argument(
        "--birth", type=str, default=None, help="comma list; rel:0.3 for relative entries"
    )
    parser.add_argument(
        "--survival", type=str, default=None, help="comma list; rel:0.3 for relative entries"
    )
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--initial-density", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--metrics-interval", type=int, default=None)
    parser.add_argument("--classifier", type=str, choices=CLASSIFIER_CHOICES, default=None)
    parser.add_argument(
        "--seeds", type=str, default=None, help="comma list of seeds; runs a seed sweep"
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


def _build_experiment_config(
    args: argparse.Namespace, file_cfg: Mapping[str, Any]
) -> ExperimentConfig:
    """Resolve every experiment field CLI > file > default."""
    neighborhood_cfg = _nested(file_cfg, "neighborhood")
    rule_cfg = _nested(file_cfg, "rule")

    dimensions = _parse_dimensions(_get_val(args.dimensions, "dimensions", file_cfg, "20x20"))
    neighborhood_type = _parse_neighborhood_type(
        _coerce_str(
            _get_val(args.neighborhood, "type", neighborhood_cfg, NeighborhoodType.MOORE.value),
            "neighborhood",
        )
    )
    radius = _get_optional_int(args.radius, "range", neighborhood_cfg)
    birth = _parse_thresholds(_get_val(args.birth, "birth", rule_cfg, DEFAULT_BIRTH), "birth")
    survival = _parse_thresholds(
        _get_val(args.survival, "survival", rule_cfg, DEFAULT_SURVIVAL), "survival"
    )
    return ExperimentConfig(
        dimensions=dimensions,
        neighborhood=NeighborhoodSpec(type=neighborhood_type, radius=radius),
        rule=RuleSpec(birth=birth, survival=survival),
        steps=_coerce_int(_get_val(args.steps, "steps", file_cfg, 100), "steps"),
        initial_density=_coerce_float(
            _get_val(args.initial_density, "initial_density", file_cfg, 0.3), "initial_density"
        ),
        seed=_get_optional_int(args.seed, "seed", file_cfg),
        metrics_interval=_get_optional_int(args.metrics_interval, "metrics_interval", file_cfg),
    )


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for experiments and seed sweeps.

    Supports ``--config path/to/config.json`` for experiment reproducibility.
    The file uses the experiment JSON shape (``dimensions``, ``neighborhood``,
    ``rule``, ``steps``, ...) plus optional ``classifier``, ``seeds`` and
    ``out_dir`` keys. CLI arguments override config-file values; config-file
    values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load config file defaults (CLI overrides file, file overrides built-in)
    file_cfg: dict[str, Any] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    log_level = _coerce_str(_get_val(args.log_level, "log_level", file_cfg, "WARNING"), "log_level")
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        experiment_config = _build_experiment_config(args, file_cfg)
        classifier_name = _coerce_str(
            _get_val(args.classifier, "classifier", file_cfg, "hash-based"), "classifier"
        )
        if classifier_name not in CLASSIFIER_CHOICES:
            raise ValueError(f"classifier must be one of {', '.join(CLASSIFIER_CHOICES)}")
        seeds_raw = _get_val(args.seeds, "seeds", file_cfg, None)
        seeds = _parse_seed_list(seeds_raw) if seeds_raw is not None else None
        out_dir = Path(_coerce_str(_get_val(args.out_dir, "out_dir", file_cfg, "data"), "out_dir"))
    except ValueError as exc:
        parser.error(str(exc))

    use_multi_metric = classifier_name == "multi-metric"
    classifier = (
        simple_classifier(multi_metric_classifier) if use_multi_metric else hash_based_classifier
    )

    summary: dict[str, Any]
    if seeds is not None:
        sweep_config = SeedSweepConfig(
            experiment=experiment_config,
            seeds=seeds,
            out_dir=out_dir,
            enhanced_metrics=use_multi_metric,
        )
        try:
            results = run_seed_sweep(sweep_config, classifier)
        except ValueError as exc:
            parser.error(str(exc))
        outcome_summary = build_outcome_summary(results)
        summary = {
            "mode": "seed_sweep",
            "classifier": classifier_name,
            "out_dir": str(out_dir),
            "runs": outcome_summary["runs"],
            "outcome_counts": outcome_summary["outcome_counts"],
        }
    else:
        try:
            result = run_experiment(
                experiment_config, classifier, enhanced_metrics=use_multi_metric
            )
        except ValueError as exc:
            parser.error(str(exc))
        summary = {
            "mode": "single",
            "classifier": classifier_name,
            "outcome": result.outcome.value,
            "final_population": result.final_population,
            "samples": len(result.metrics_history),
            "config": experiment_config.to_dict(),
        }
        if use_multi_metric:
            summary["classification"] = multi_metric_classifier(
                result.metrics_history  # type: ignore[arg-type]
            ).to_dict()
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
