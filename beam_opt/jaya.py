"""
Jaya optimizer.

Parameter-free population method: every member moves towards the current
best and away from the current worst member. There are no selection,
crossover or mutation operators; a member is replaced only when its
candidate update is strictly better.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from .data_models import Design, JayaConfig, Member, OptimizationResult
from .evaluator import evaluate_design, is_better
from .search_space import (
    best_index,
    clamp_design,
    initialize_population,
    population_minimum,
    worst_index,
)

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, List[Member], float], None]


def jaya_update(
    current: Design,
    best: Design,
    worst: Design,
    r1: np.ndarray,
    r2: np.ndarray
) -> Design:
    """
    Apply the Jaya move to one design (before clamping).

    new[j] = x[j] + r1[j] * (best[j] - |x[j]|) - r2[j] * (worst[j] - |x[j]|)

    Args:
        current: Design being updated
        best: Best design of the population
        worst: Worst design of the population
        r1: Four uniform draws in [0, 1)
        r2: Four uniform draws in [0, 1)

    Returns:
        Unclamped candidate design
    """
    x = np.asarray(current.as_tuple())
    new = (
        x
        + r1 * (np.asarray(best.as_tuple()) - np.abs(x))
        - r2 * (np.asarray(worst.as_tuple()) - np.abs(x))
    )
    return Design.from_sequence(new.tolist())


def jaya_iteration(
    population: List[Member],
    config: JayaConfig,
    rng: np.random.Generator
) -> List[Member]:
    """
    Run one Jaya iteration and return the next population.

    Best and worst are fixed at the start of the iteration. For each member in
    order, r1 then r2 (four draws each) are taken from rng. The input list is
    not modified.
    """
    best = population[best_index(population)].design
    worst = population[worst_index(population)].design

    candidates = []
    for member in population:
        r1 = rng.random(4)
        r2 = rng.random(4)
        candidate = jaya_update(member.design, best, worst, r1, r2)
        candidates.append(clamp_design(candidate, config.bounds))

    # Greedy replacement, slot by slot
    next_population = []
    for member, design in zip(population, candidates):
        trial = Member(design, evaluate_design(design))
        next_population.append(trial if is_better(trial.objective, member.objective) else member)

    return next_population


def run_jaya(
    config: JayaConfig,
    rng: np.random.Generator,
    callback: Optional[IterationCallback] = None,
    seed: Optional[int] = None
) -> OptimizationResult:
    """
    Run the Jaya optimizer for a fixed number of iterations.

    Args:
        config: Run parameters (population size, iterations, bounds)
        rng: Random number generator, the only source of randomness
        callback: Optional hook called as callback(iteration, population, minimum)
            after each iteration is committed
        seed: Seed used to build rng, recorded in the result

    Returns:
        OptimizationResult with the best member of the final population and
        the per-iteration population minimum
    """
    population = initialize_population(config.population_size, config.bounds, rng)
    initial_best = population_minimum(population)
    history = []

    for iteration in range(1, config.iterations + 1):
        population = jaya_iteration(population, config, rng)
        minimum = population_minimum(population)
        history.append(minimum)
        if callback is not None:
            callback(iteration, population, minimum)

    best = population[best_index(population)]
    logger.info(
        "Jaya finished %d iterations: initial best %.6f, final best %.6f",
        config.iterations, initial_best, best.objective
    )

    return OptimizationResult(
        algorithm="jaya",
        best=best,
        history=history,
        population=population,
        initial_best=initial_best,
        seed=seed,
    )
