"""
Convergence reporting for optimizer runs.

Formats the best design as a text report and plots the best-history
convergence curve.
"""

from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from .data_models import OptimizationResult
from .evaluator import (
    ALLOWABLE_STRESS,
    AREA_LIMIT,
    BEAM_LENGTH,
    ELASTIC_MODULUS,
    STRESS_LIMIT,
    VERTICAL_LOAD,
)

TITLES = {
    "jaya": "Convergence of Jaya Algorithm",
    "ga": "Convergence of Pure GA",
}

X_LABELS = {
    "jaya": "Iteration",
    "ga": "Generation",
}


def format_report(result: OptimizationResult, title: Optional[str] = None) -> str:
    """
    Generate a human-readable report of the best design found.

    Design variables and constraints are printed with 4 decimals, the
    objective with 6.
    """
    best = result.best
    design = best.design
    evaluation = best.evaluation

    if title is None:
        title = f"BEST DESIGN FOUND ({result.algorithm.upper()})"

    lines = []
    lines.append("=" * 60)
    lines.append(title)
    lines.append("=" * 60)
    lines.append(f"Height h           = {design.h:.4f} cm")
    lines.append(f"Width b            = {design.b:.4f} cm")
    lines.append(f"Web thickness tw   = {design.tw:.4f} cm")
    lines.append(f"Flange thickness tf = {design.tf:.4f} cm")
    lines.append("")
    lines.append(f"Objective (deflection proxy) = {best.objective:.6f}")
    lines.append(f"Constraint g1 (area)   = {evaluation.g1:.4f} cm^2 (<= {AREA_LIMIT:g})")
    lines.append(f"Constraint g2 (stress) = {evaluation.g2:.4f} kN/cm^2 (<= {STRESS_LIMIT:g})")
    lines.append("")
    lines.append(f"Feasible: {'yes' if evaluation.feasible else 'no'}")
    lines.append(f"Iterations: {result.iterations}")
    lines.append(f"Initial best objective: {result.initial_best:.6f}")
    if result.seed is not None:
        lines.append(f"Random seed: {result.seed}")
    lines.append("")
    lines.append("PROBLEM DATA:")
    lines.append(f"  Allowable stress     = {ALLOWABLE_STRESS:g} kN/cm^2")
    lines.append(f"  Elastic modulus E    = {ELASTIC_MODULUS:g} kN/cm^2")
    lines.append(f"  Vertical load P      = {VERTICAL_LOAD:g} kN")
    lines.append(f"  Beam length L        = {BEAM_LENGTH:g} cm")

    return "\n".join(lines)


def print_report(result: OptimizationResult, title: Optional[str] = None) -> str:
    report = format_report(result, title)
    print(report)
    return report


def plot_convergence(
    history: Sequence[float],
    title: str = "Convergence",
    xlabel: str = "Iteration",
    figsize: Tuple[int, int] = (8, 5),
    save_path: Optional[str] = None,
    show: bool = False
) -> plt.Figure:
    """
    Plot the best objective value per iteration.

    Args:
        history: Best-history sequence, one value per iteration
        title: Plot title
        xlabel: Label of the iteration axis
        figsize: Figure size (width, height)
        save_path: Optional path to save the figure as PNG
        show: Display the figure interactively

    Returns:
        The matplotlib figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    iterations = list(range(1, len(history) + 1))
    ax.plot(iterations, list(history), lw=1.5)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Best Objective Value (Deflection Proxy)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig


def plot_result(result: OptimizationResult, save_path: Optional[str] = None, show: bool = False) -> plt.Figure:
    """Plot the convergence curve of a result with algorithm-specific labels."""
    return plot_convergence(
        result.history,
        title=TITLES[result.algorithm],
        xlabel=X_LABELS[result.algorithm],
        save_path=save_path,
        show=show,
    )


def summarize_history(history: List[float]) -> dict:
    """Basic statistics of a best-history sequence."""
    if not history:
        return {'iterations': 0, 'first': None, 'last': None, 'minimum': None, 'improvements': 0}

    improvements = sum(1 for prev, cur in zip(history, history[1:]) if cur < prev)
    return {
        'iterations': len(history),
        'first': history[0],
        'last': history[-1],
        'minimum': min(history),
        'improvements': improvements,
    }
