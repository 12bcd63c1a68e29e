"""Configuration dataclasses and result containers for automaton experiments.

All frozen dataclasses that parameterise a run (dimensions, neighborhood,
rule thresholds, sampling) and the records a run produces (per-step metrics,
classified results) live here.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

__all__ = [
    "EnhancedMetrics",
    "ExperimentConfig",
    "ExperimentResult",
    "Metrics",
    "NeighborhoodSpec",
    "NeighborhoodType",
    "Outcome",
    "RelativeThreshold",
    "RuleSpec",
    "SeedSweepConfig",
    "Threshold",
    "normalize_dimensions",
]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class NeighborhoodType(Enum):
    """Neighborhood topology: which offsets count as neighbors."""

    MOORE = "moore"
    VON_NEUMANN = "von-neumann"


class Outcome(Enum):
    """Qualitative long-run behavior of one run."""

    EXTINCT = "extinct"
    STABLE = "stable"
    OSCILLATING = "oscillating"
    EXPLOSIVE = "explosive"


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _require_int(raw: object, key: str) -> int:
    """Return raw as int; rejects booleans and non-integral values."""
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{key} must be an integer value, got {raw!r}")
    return raw


def normalize_dimensions(raw: Sequence[int]) -> tuple[int, ...]:
    """Validate grid dimensions and return them as a tuple.

    Raises :exc:`ValueError` for an empty sequence or any size that is not a
    positive integer.
    """
    dimensions = tuple(raw)
    if not dimensions:
        raise ValueError("dimensions must not be empty")
    for size in dimensions:
        _require_int(size, "dimensions")
        if size < 1:
            raise ValueError(f"dimensions must be >= 1, got {size}")
    return dimensions


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NeighborhoodSpec:
    """Neighborhood topology and range; ``radius=None`` means the default of 1."""

    type: NeighborhoodType = NeighborhoodType.MOORE
    radius: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", NeighborhoodType(self.type))
        if self.radius is not None:
            _require_int(self.radius, "neighborhood range")
            if self.radius < 1:
                raise ValueError("neighborhood range must be >= 1")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> NeighborhoodSpec:
        raw_type = payload.get("type", NeighborhoodType.MOORE.value)
        try:
            neighborhood_type = NeighborhoodType(raw_type)
        except ValueError as exc:
            valid = ", ".join(t.value for t in NeighborhoodType)
            raise ValueError(f"neighborhood type must be one of {valid}") from exc
        return cls(type=neighborhood_type, radius=payload.get("range"))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type.value}
        if self.radius is not None:
            payload["range"] = self.radius
        return payload


@dataclass(frozen=True)
class RelativeThreshold:
    """Neighbor-count threshold given as a fraction of the maximum neighbor count."""

    relative: float


Threshold = Union[int, RelativeThreshold]
"""Absolute neighbor count or a relative fraction of the maximum."""


def _threshold_from_raw(raw: object) -> Threshold:
    if isinstance(raw, RelativeThreshold):
        return raw
    if isinstance(raw, Mapping):
        if set(raw) != {"relative"}:
            raise ValueError("relative thresholds must be objects with a single 'relative' key")
        relative = raw["relative"]
        if isinstance(relative, bool) or not isinstance(relative, (int, float)):
            raise ValueError(f"relative threshold must be numeric, got {relative!r}")
        return RelativeThreshold(relative=float(relative))
    return _require_int(raw, "absolute threshold")


def _threshold_to_raw(threshold: Threshold) -> int | dict[str, float]:
    if isinstance(threshold, RelativeThreshold):
        return {"relative": threshold.relative}
    return threshold


@dataclass(frozen=True)
class RuleSpec:
    """Birth/survival thresholds as configured, before normalization."""

    birth: tuple[Threshold, ...] = ()
    survival: tuple[Threshold, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "birth", tuple(self.birth))
        object.__setattr__(self, "survival", tuple(self.survival))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> RuleSpec:
        return cls(
            birth=tuple(_threshold_from_raw(raw) for raw in payload.get("birth", ())),
            survival=tuple(_threshold_from_raw(raw) for raw in payload.get("survival", ())),
        )

    def to_dict(self) -> dict[str, list[int | dict[str, float]]]:
        return {
            "birth": [_threshold_to_raw(t) for t in self.birth],
            "survival": [_threshold_to_raw(t) for t in self.survival],
        }


@dataclass(frozen=True)
class ExperimentConfig:
    """Full description of one run.

    ``seed`` and ``metrics_interval`` stay ``None`` when the caller leaves them
    unset; the orchestrator resolves defaults internally and never writes them
    back.
    """

    dimensions: tuple[int, ...]
    neighborhood: NeighborhoodSpec
    rule: RuleSpec
    steps: int
    initial_density: float
    seed: int | None = None
    metrics_interval: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", normalize_dimensions(self.dimensions))
        if _require_int(self.steps, "steps") < 0:
            raise ValueError("steps must be >= 0")
        if isinstance(self.initial_density, bool) or not isinstance(
            self.initial_density, (int, float)
        ):
            raise ValueError("initial_density must be a float value")
        if not 0.0 <= self.initial_density <= 1.0:
            raise ValueError("initial_density must be in [0.0, 1.0]")
        if self.seed is not None:
            _require_int(self.seed, "seed")
        if self.metrics_interval is not None:
            if _require_int(self.metrics_interval, "metrics_interval") < 1:
                raise ValueError("metrics_interval must be >= 1")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ExperimentConfig:
        """Build a config from its JSON wire shape."""
        missing = [
            key
            for key in ("dimensions", "neighborhood", "rule", "steps", "initial_density")
            if key not in payload
        ]
        if missing:
            raise ValueError(f"experiment config is missing keys: {', '.join(missing)}")
        initial_density = payload["initial_density"]
        if isinstance(initial_density, int) and not isinstance(initial_density, bool):
            initial_density = float(initial_density)
        return cls(
            dimensions=tuple(payload["dimensions"]),
            neighborhood=NeighborhoodSpec.from_dict(payload["neighborhood"]),
            rule=RuleSpec.from_dict(payload["rule"]),
            steps=payload["steps"],
            initial_density=initial_density,
            seed=payload.get("seed"),
            metrics_interval=payload.get("metrics_interval"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON wire shape; unset optional fields stay absent."""
        payload: dict[str, Any] = {
            "dimensions": list(self.dimensions),
            "neighborhood": self.neighborhood.to_dict(),
            "rule": self.rule.to_dict(),
            "steps": self.steps,
            "initial_density": self.initial_density,
        }
        if self.seed is not None:
            payload["seed"] = self.seed
        if self.metrics_interval is not None:
            payload["metrics_interval"] = self.metrics_interval
        return payload


@dataclass(frozen=True)
class SeedSweepConfig:
    """One experiment repeated over several seeds, with artifacts under ``out_dir``."""

    experiment: ExperimentConfig
    seeds: tuple[int, ...]
    out_dir: Path = Path("data")
    enhanced_metrics: bool = False

    def __post_init__(self) -> None:
        seeds = tuple(self.seeds)
        if not seeds:
            raise ValueError("seeds must not be empty")
        for seed in seeds:
            _require_int(seed, "seeds")
        if len(set(seeds)) != len(seeds):
            raise ValueError("seeds must be distinct")
        object.__setattr__(self, "seeds", seeds)
        object.__setattr__(self, "out_dir", Path(self.out_dir))


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Metrics:
    """Population statistics sampled after one generation."""

    population: int
    density: float
    births: int
    deaths: int
    delta: int
    step: int

    def to_dict(self) -> dict[str, int | float]:
        return asdict(self)


@dataclass(frozen=True)
class EnhancedMetrics(Metrics):
    """Metrics plus spatial entropy and a state hash for cycle detection."""

    entropy: float = 0.0
    state_hash: int = 0


@dataclass(frozen=True)
class ExperimentResult:
    """Top-level result for one run; ``config`` is the caller's own object."""

    outcome: Outcome
    final_population: int
    metrics_history: tuple[Metrics, ...]
    config: ExperimentConfig

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "final_population": self.final_population,
            "metrics_history": [m.to_dict() for m in self.metrics_history],
            "config": self.config.to_dict(),
        }

