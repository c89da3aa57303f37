"""
I-Beam Sizing Optimizers

Population-based metaheuristics (Jaya and a genetic algorithm) that size an
I-beam cross-section by minimizing a deflection proxy under area and stress
constraints.

Modules:
- data_models: Core data structures (Design, Bounds, Evaluation, Member, run configs)
- evaluator: Objective/constraint evaluation with penalty sentinel
- search_space: Random initialization, clamping, population helpers
- jaya: Jaya optimizer (best/worst guided update, greedy replacement)
- ga: Genetic algorithm (tournament, blend crossover, Gaussian mutation)
- config: YAML run configuration loading and validation
- reporting: Text report and convergence plot
- io_utils: Output folders and history CSV
- cli: Run-from-config entry point used by beam_cli.py
"""

__version__ = "0.1.0"
__author__ = "Structural Optimization Team"

from .data_models import (
    Design,
    Interval,
    Bounds,
    Evaluation,
    Member,
    JayaConfig,
    GAConfig,
    OptimizationResult,
)
from .evaluator import evaluate, evaluate_design, PENALTY
from .jaya import run_jaya
from .ga import run_ga

__all__ = [
    "Design",
    "Interval",
    "Bounds",
    "Evaluation",
    "Member",
    "JayaConfig",
    "GAConfig",
    "OptimizationResult",
    "evaluate",
    "evaluate_design",
    "PENALTY",
    "run_jaya",
    "run_ga",
]
