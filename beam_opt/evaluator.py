"""
Design evaluator for the I-beam sizing problem.

Maps the four section variables to the deflection proxy objective and the
area and stress constraint values, applying the penalty sentinel to
infeasible sections.
"""

import logging
import math

import numpy as np

from .data_models import Design, Evaluation

logger = logging.getLogger(__name__)

# Objective and constraint constants
PENALTY = 1e6
AREA_LIMIT = 300.0       # cm^2
STRESS_LIMIT = 6.0       # kN/cm^2
LOAD_SCALE = 5000.0

# Reference problem data, reported alongside results
ALLOWABLE_STRESS = 6.0   # kN/cm^2
ELASTIC_MODULUS = 20000.0  # kN/cm^2
VERTICAL_LOAD = 600.0    # kN
BEAM_LENGTH = 200.0      # cm


def section_properties(h: float, b: float, tw: float, tf: float) -> tuple[float, float, float]:
    """
    Compute moment of inertia and constraint values of an I-section.

    Args:
        h: Section height
        b: Flange width
        tw: Web thickness
        tf: Flange thickness

    Returns:
        Tuple of (I, g1, g2) where I is the second moment of area, g1 the
        area and g2 the stress constraint value

    Note:
        Degenerate sections are not guarded: division by zero yields
        inf or nan rather than raising.
    """
    h, b, tw, tf = (np.float64(v) for v in (h, b, tw, tf))
    web = h - 2 * tf

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        inertia = tw * web**3 / 12 + b * tf**3 / 6 + 2 * b * tf * ((h - tf) / 2)**2
        g1 = 2 * b * tf + tw * web
        denom = (
            tw * web**3
            + 2 * b * tf * (4 * tf**2 + 3 * h * web)
            + tw**3 * web
            + 2 * tw * b**3
        )
        g2 = (18000 * h + 15000 * b) / denom

    return float(inertia), float(g1), float(g2)


def evaluate(h: float, b: float, tw: float, tf: float) -> Evaluation:
    """
    Evaluate objective and constraints for one candidate section.

    The objective is the deflection proxy 5000 / I, replaced by the penalty
    sentinel 1e6 whenever g1 > 300 or g2 > 6.

    Returns:
        Evaluation with f, g1, g2, the moment of inertia and feasibility
    """
    inertia, g1, g2 = section_properties(h, b, tw, tf)
    feasible = not (g1 > AREA_LIMIT or g2 > STRESS_LIMIT)

    if feasible:
        with np.errstate(divide="ignore", invalid="ignore"):
            f = float(np.float64(LOAD_SCALE) / np.float64(inertia))
    else:
        f = PENALTY

    if not math.isfinite(f):
        logger.debug(
            "Non-finite objective %s for h=%s b=%s tw=%s tf=%s (I=%s)",
            f, h, b, tw, tf, inertia
        )

    return Evaluation(f=f, g1=g1, g2=g2, inertia=inertia, feasible=feasible)


def evaluate_design(design: Design) -> Evaluation:
    """Evaluate a Design record."""
    return evaluate(design.h, design.b, design.tw, design.tf)


def objective_key(f: float) -> float:
    """
    Sort key for objective values under minimization.

    Non-finite objectives rank after every finite value, including the
    penalty sentinel.
    """
    return f if math.isfinite(f) else math.inf


def is_better(candidate: float, incumbent: float) -> bool:
    """True when candidate is strictly lower than incumbent."""
    return objective_key(candidate) < objective_key(incumbent)
