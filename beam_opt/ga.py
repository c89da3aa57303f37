"""
Genetic algorithm optimizer.

Binary tournament selection, uniform arithmetic (blend) crossover and
per-gene Gaussian mutation with generational replacement. There is no
elitism, so the best individual may be lost between generations and the
best-history is not guaranteed to be monotonic.

Random draws per pairing step, in order:
    1. Tournament 1: two indices
    2. Tournament 2: two indices
    3. Crossover coin, then four blend weights only if crossing
    4. Child 1 genes: coin per gene, normal draw only when the gene mutates
    5. Child 2 genes, only when child 2 fits in the new population
"""

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from .data_models import FIELDS, Bounds, Design, GAConfig, Member, OptimizationResult
from .evaluator import is_better
from .search_space import (
    best_index,
    evaluate_population,
    initialize_population,
    population_minimum,
)

logger = logging.getLogger(__name__)

GenerationCallback = Callable[[int, List[Member], float], None]


def tournament_selection(population: List[Member], rng: np.random.Generator) -> Design:
    """
    Binary tournament: sample two indices with replacement, keep the fitter.

    The first sampled member wins only when strictly better; ties and equal
    indices resolve to the second one.
    """
    i1, i2 = rng.integers(0, len(population), size=2)
    if is_better(population[i1].objective, population[i2].objective):
        return population[i1].design
    return population[i2].design


def blend_crossover(
    parent_a: Design,
    parent_b: Design,
    rng: np.random.Generator
) -> Tuple[Design, Design]:
    """
    Uniform arithmetic crossover with one weight per gene.

    child_a[j] = alpha[j] * a[j] + (1 - alpha[j]) * b[j]
    child_b[j] = alpha[j] * b[j] + (1 - alpha[j]) * a[j]

    Returns:
        Tuple of (child_a, child_b)
    """
    alpha = rng.random(len(FIELDS))
    a = np.asarray(parent_a.as_tuple())
    b = np.asarray(parent_b.as_tuple())
    child_a = alpha * a + (1 - alpha) * b
    child_b = alpha * b + (1 - alpha) * a
    return Design.from_sequence(child_a.tolist()), Design.from_sequence(child_b.tolist())


def gaussian_mutation(
    design: Design,
    bounds: Bounds,
    mutation_rate: float,
    mutation_strength: float,
    rng: np.random.Generator
) -> Design:
    """
    Add N(0, mutation_strength^2) noise to each gene with probability mutation_rate.

    Mutated genes are clamped to their interval; untouched genes are kept
    as they are.
    """
    mutated = design
    for name in FIELDS:
        if rng.random() < mutation_rate:
            delta = mutation_strength * rng.standard_normal()
            value = bounds.interval(name).clamp(getattr(mutated, name) + delta)
            mutated = mutated.with_value(name, value)
    return mutated


def breed_generation(
    population: List[Member],
    config: GAConfig,
    rng: np.random.Generator
) -> List[Design]:
    """
    Build the designs of the next generation.

    Pairs are produced until population_size children exist. With an odd
    size the second child of the last pair is discarded before mutation.
    """
    size = config.population_size
    children: List[Design] = []

    while len(children) < size:
        parent_a = tournament_selection(population, rng)
        parent_b = tournament_selection(population, rng)

        if rng.random() < config.crossover_rate:
            child_a, child_b = blend_crossover(parent_a, parent_b, rng)
        else:
            child_a, child_b = parent_a, parent_b

        children.append(gaussian_mutation(
            child_a, config.bounds, config.mutation_rate, config.mutation_strength, rng
        ))
        if len(children) < size:
            children.append(gaussian_mutation(
                child_b, config.bounds, config.mutation_rate, config.mutation_strength, rng
            ))

    return children


def run_ga(
    config: GAConfig,
    rng: np.random.Generator,
    callback: Optional[GenerationCallback] = None,
    seed: Optional[int] = None
) -> OptimizationResult:
    """
    Run the genetic algorithm for a fixed number of generations.

    Args:
        config: Run parameters (sizes, rates, bounds)
        rng: Random number generator, the only source of randomness
        callback: Optional hook called as callback(generation, population, minimum)
            after each generation is committed
        seed: Seed used to build rng, recorded in the result

    Returns:
        OptimizationResult with the best member of the final population and
        the per-generation population minimum
    """
    population = initialize_population(config.population_size, config.bounds, rng)
    initial_best = population_minimum(population)
    history = []

    for generation in range(1, config.generations + 1):
        children = breed_generation(population, config, rng)
        # Generational replacement, no elitism
        population = evaluate_population(children)
        minimum = population_minimum(population)
        history.append(minimum)
        if callback is not None:
            callback(generation, population, minimum)

    best = population[best_index(population)]
    logger.info(
        "GA finished %d generations: initial best %.6f, final best %.6f",
        config.generations, initial_best, best.objective
    )

    return OptimizationResult(
        algorithm="ga",
        best=best,
        history=history,
        population=population,
        initial_best=initial_best,
        seed=seed,
    )
