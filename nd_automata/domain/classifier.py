"""Outcome classifiers over a sampled metrics history.

Two classifiers are provided:

``hash_based_classifier``
    The default. Looks only at the population series and returns one
    :class:`~nd_automata.config.types.Outcome`.
``multi_metric_classifier``
    Combines population trend, entropy trend and state-hash cycles into a
    :class:`ClassificationResult` with a Wolfram class, a confidence and a
    reasoning trail. Requires :class:`~nd_automata.config.types.EnhancedMetrics`.

Any callable matching :class:`OutcomeClassifier` can be passed to the
experiment runner instead.
"""

from __future__ import annotations

import statistics
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from nd_automata.config.constants import (
    MULTI_METRIC_CYCLE_MIN_WINDOW,
    MULTI_METRIC_GROWTH_RATIO,
)
from nd_automata.config.types import EnhancedMetrics, Metrics, Outcome
from nd_automata.metrics.temporal import (
    EntropyTrend,
    PopulationTrend,
    detect_hash_cycle,
    entropy_trend,
    find_period,
    is_sustained_growth,
    population_trend,
    tail_window,
)


class OutcomeClassifier(Protocol):
    """Pure mapping from a metrics history to an outcome."""

    def __call__(self, metrics_history: Sequence[Metrics]) -> Outcome: ...


# ---------------------------------------------------------------------------
# Population-based classifier
# ---------------------------------------------------------------------------


def hash_based_classifier(metrics_history: Sequence[Metrics]) -> Outcome:
    """Classify by population alone: extinct, then oscillating, then explosive, else stable."""
    if not metrics_history or metrics_history[-1].population == 0:
        return Outcome.EXTINCT
    populations = [m.population for m in metrics_history]
    if find_period(tail_window(populations)) is not None:
        return Outcome.OSCILLATING
    if is_sustained_growth(populations):
        return Outcome.EXPLOSIVE
    return Outcome.STABLE


# ---------------------------------------------------------------------------
# Multi-metric classifier
# ---------------------------------------------------------------------------


class WolframClass(Enum):
    """Wolfram's four behavior classes, split for fixed points and cycles."""

    EXTINCT = "extinct"
    CLASS1 = "class1"
    CLASS2_STABLE = "class2_stable"
    CLASS2_PERIODIC = "class2_periodic"
    CLASS3 = "class3"
    CLASS4 = "class4"


@dataclass(frozen=True)
class ClassificationDetails:
    cycle_detected: bool
    cycle_period: int | None
    entropy_trend: EntropyTrend
    population_trend: PopulationTrend

    def to_dict(self) -> dict[str, object]:
        return {
            "cycle_detected": self.cycle_detected,
            "cycle_period": self.cycle_period,
            "entropy_trend": self.entropy_trend.value,
            "population_trend": self.population_trend.value,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Structured verdict of :func:`multi_metric_classifier`."""

    outcome: Outcome
    wolfram_class: WolframClass
    confidence: float
    details: ClassificationDetails
    reasoning: tuple[str, ...]

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("confidence must be in [0.0, 1.0]")

    def to_dict(self) -> dict[str, object]:
        return {
            "outcome": self.outcome.value,
            "wolfram_class": self.wolfram_class.value,
            "confidence": self.confidence,
            "details": self.details.to_dict(),
            "reasoning": list(self.reasoning),
        }


def _growth_ratio(populations: Sequence[int]) -> float | None:
    n = len(populations)
    early = populations[: max(1, int(n * 0.3))]
    late = populations[int(n * 0.7) :]
    early_mean = sum(early) / len(early)
    if early_mean <= 0 or not late:
        return None
    return (sum(late) / len(late)) / early_mean


def multi_metric_classifier(metrics_history: Sequence[EnhancedMetrics]) -> ClassificationResult:
    """Classify with population, entropy and exact-cycle evidence.

    Checks run in order and the first that fires decides: extinction, a
    homogeneous live grid, a state-hash cycle, chaotic entropy, explosive
    growth, edge-of-chaos behavior, then a stable default.
    """
    reasoning: list[str] = []
    if not metrics_history:
        reasoning.append("empty history: nothing survived to be sampled")
        return ClassificationResult(
            outcome=Outcome.EXTINCT,
            wolfram_class=WolframClass.EXTINCT,
            confidence=1.0,
            details=ClassificationDetails(
                cycle_detected=False,
                cycle_period=None,
                entropy_trend=EntropyTrend.STABLE,
                population_trend=PopulationTrend.STABLE,
            ),
            reasoning=tuple(reasoning),
        )

    if not all(isinstance(m, EnhancedMetrics) for m in metrics_history):
        raise ValueError("multi-metric classification requires EnhancedMetrics")

    final = metrics_history[-1]
    populations = [m.population for m in metrics_history]
    entropies = [m.entropy for m in metrics_history]
    pop_trend = population_trend(populations)
    ent_trend = entropy_trend(entropies)
    window = max(MULTI_METRIC_CYCLE_MIN_WINDOW, int(len(metrics_history) * 0.5))
    cycle = detect_hash_cycle([m.state_hash for m in metrics_history], window)
    details = ClassificationDetails(
        cycle_detected=cycle is not None,
        cycle_period=cycle.period if cycle is not None else None,
        entropy_trend=ent_trend,
        population_trend=pop_trend,
    )
    reasoning.append(f"population trend {pop_trend.value}, entropy trend {ent_trend.value}")

    def verdict(
        outcome: Outcome, wolfram: WolframClass, confidence: float, why: str
    ) -> ClassificationResult:
        reasoning.append(why)
        return ClassificationResult(
            outcome=outcome,
            wolfram_class=wolfram,
            confidence=confidence,
            details=details,
            reasoning=tuple(reasoning),
        )

    if final.population == 0:
        return verdict(Outcome.EXTINCT, WolframClass.EXTINCT, 1.0, "final population is 0")

    if final.entropy == 0.0:
        return verdict(
            Outcome.STABLE,
            WolframClass.CLASS1,
            0.95,
            "final grid is homogeneous (entropy 0) with live cells",
        )

    if cycle is not None:
        if cycle.period == 1:
            return verdict(
                Outcome.STABLE,
                WolframClass.CLASS2_STABLE,
                0.95,
                f"state hash repeats every step from sample {cycle.first_occurrence}",
            )
        return verdict(
            Outcome.OSCILLATING,
            WolframClass.CLASS2_PERIODIC,
            0.9,
            f"state hash cycle of period {cycle.period} from sample {cycle.first_occurrence}",
        )
    reasoning.append(f"no state hash cycle in the last {window} samples")

    entropy_mean = statistics.fmean(entropies)
    entropy_variance = statistics.pvariance(entropies)
    if entropy_variance > 0.02 and ent_trend is EntropyTrend.FLUCTUATING:
        return verdict(
            Outcome.OSCILLATING,
            WolframClass.CLASS3,
            0.75,
            f"entropy variance {entropy_variance:.4f} with fluctuating entropy reads as chaotic",
        )

    if pop_trend is PopulationTrend.GROWING:
        ratio = _growth_ratio(populations)
        if ratio is not None and ratio > MULTI_METRIC_GROWTH_RATIO:
            return verdict(
                Outcome.EXPLOSIVE,
                WolframClass.CLASS3,
                0.8,
                f"late population is {ratio:.2f}x the early population",
            )
        reasoning.append("population grows but not enough to count as explosive")

    if ent_trend is EntropyTrend.STABLE and 0.3 < entropy_mean < 0.8 and len(metrics_history) >= 50:
        return verdict(
            Outcome.STABLE,
            WolframClass.CLASS4,
            0.5,
            f"stable mid-range entropy (mean {entropy_mean:.3f}) without a cycle",
        )

    return verdict(Outcome.STABLE, WolframClass.CLASS2_STABLE, 0.7, "no stronger signal found")


def simple_classifier(
    structured: Callable[[Sequence[EnhancedMetrics]], ClassificationResult],
) -> OutcomeClassifier:
    """Adapt a structured classifier to the plain outcome-only protocol.

    The adapter is marked ``requires_enhanced_metrics`` so the experiment
    runner collects entropy and state hashes for it.
    """

    def classify(metrics_history: Sequence[Metrics]) -> Outcome:
        return structured(metrics_history).outcome  # type: ignore[arg-type]

    classify.requires_enhanced_metrics = True  # type: ignore[attr-defined]
    return classify
