"""Experiments layer: single runs, seed sweeps, summaries, and the CLI."""

from nd_automata.experiments.experiment import run_experiment
from nd_automata.experiments.summaries import build_outcome_summary
from nd_automata.experiments.sweep import run_seed_sweep

__all__ = [
    "build_outcome_summary",
    "run_experiment",
    "run_seed_sweep",
]
